"""Exception hierarchy shared across the newsquiz system."""


class NewsQuizError(Exception):
    """Base class for all newsquiz errors."""


class ConfigurationError(NewsQuizError):
    """Required configuration (credential, endpoint) is missing or invalid."""


class StoreError(NewsQuizError):
    """The claim store could not complete an operation."""


class ClaimNotFoundError(StoreError):
    """No claim exists with the requested id."""

    def __init__(self, claim_id: str):
        super().__init__(f"Claim {claim_id} not found")
        self.claim_id = claim_id


class PipelineError(NewsQuizError):
    """A generation run hit an unrecoverable error and was aborted."""

    def __init__(self, message: str, stage: str):
        super().__init__(message)
        self.stage = stage
