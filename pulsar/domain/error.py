"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class BusinessRuleViolationError(DomainError):
    """Business rule violation error."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found.

    Also raised when the resource exists but belongs to another user, so
    callers cannot probe for other users' votes.
    """

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class DuplicateVoteError(BusinessRuleViolationError):
    """Raised when a user already has a vote on the submission."""

    def __init__(self, submission_id: str):
        self.submission_id = submission_id
        super().__init__("Already voted on this submission")


class VoteLimitReachedError(BusinessRuleViolationError):
    """Raised when a user has no votes left for the current day.

    Carries the quota snapshot so callers can report the reset countdown.
    """

    def __init__(self, quota):
        self.quota = quota
        super().__init__(
            f"You have used all {quota.daily_limit} votes for today. "
            "Try again tomorrow!"
        )
