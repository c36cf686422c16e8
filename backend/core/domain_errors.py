"""Exceptions raised by domain objects when a business rule forbids an action."""


class DomainRuleError(Exception):
    """An operation is not allowed in the aggregate's current state."""

    error_code = "BUSINESS_RULE_VIOLATION"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidStatusTransition(DomainRuleError):
    """A status value object was asked for a transition it does not allow."""

    error_code = "INVALID_STATUS_TRANSITION"

    def __init__(self, kind: str, current: str, action: str):
        super().__init__(f"Cannot {action} a {current} {kind}")
        self.kind = kind
        self.current = current
        self.action = action
