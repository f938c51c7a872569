class NavigatorError(Exception):
    """Base exception for the navigator."""


class CatalogError(NavigatorError):
    """Raised when a step catalog definition is malformed."""


class PreconditionError(NavigatorError):
    """Raised when a wizard operation is called in a way the caller must never allow."""


class StepKindError(PreconditionError):
    """Raised when an answer mutator does not match the step kind."""


class AnswerShapeError(PreconditionError):
    """Raised when stored answers do not match the catalog shape."""


class NavigationError(NavigatorError):
    """Raised when a navigation transition is not permitted in the current state."""


class StaleStepError(NavigationError):
    """Raised when an action targets a step that is no longer active."""
