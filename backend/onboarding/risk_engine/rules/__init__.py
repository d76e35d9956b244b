from onboarding.risk_engine.rules.business_info import BusinessInformationRule
from onboarding.risk_engine.rules.compliance import ComplianceCertificationsRule
from onboarding.risk_engine.rules.email_domain import EmailDomainRule
from onboarding.risk_engine.rules.entity_specific import EntitySpecificFieldRule
from onboarding.risk_engine.rules.missing_fields import MissingFieldsRule
from onboarding.risk_engine.rules.security_controls import SecurityControlsRule
from onboarding.risk_engine.rules.tax_id_format import TaxIdFormatRule
from onboarding.risk_engine.rules.website_format import WebsiteFormatRule

# Evaluation order is observable: factors are reported in this order.
DEFAULT_RULES = [
    MissingFieldsRule,
    EntitySpecificFieldRule,
    SecurityControlsRule,
    ComplianceCertificationsRule,
    BusinessInformationRule,
    EmailDomainRule,
    TaxIdFormatRule,
    WebsiteFormatRule,
]
