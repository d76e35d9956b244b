from rest_framework.throttling import ScopedRateThrottle


class OnboardingScopedRateThrottle(ScopedRateThrottle):
    """Scoped throttle that falls back to the ``default`` rate for unscoped views."""

    default_scope = 'default'

    def allow_request(self, request, view):
        scope = getattr(view, self.scope_attr, None) or self.default_scope
        if scope not in self.THROTTLE_RATES:
            scope = self.default_scope

        self.scope = scope
        self.rate = self.get_rate()
        self.num_requests, self.duration = self.parse_rate(self.rate)

        # Skip ScopedRateThrottle.allow_request, which re-reads the scope from the view.
        return super(ScopedRateThrottle, self).allow_request(request, view)
