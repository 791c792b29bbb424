class DomainException(Exception):
    """Base exception for all domain errors"""
    pass

class RecipeNotFoundError(DomainException):
    """Raised when a recipe id is not present in the catalog"""
    pass

class RecipeNotAvailableError(DomainException):
    """Raised when a facility is asked to run a recipe it does not offer"""
    pass

class FacilityNotFoundError(DomainException):
    """Raised when facility not found"""
    pass

class UnknownFacilityTypeError(DomainException):
    """Raised when building a facility of a type with no configuration"""
    pass

class InsufficientResourcesError(DomainException):
    """Raised when inventory does not hold the resources an operation needs"""
    pass

class TickNotInProgressError(DomainException):
    """Raised when a tick is applied without holding the processing guard"""
    pass

class PersistenceError(DomainException):
    """Raised when the persistence collaborator fails to load or save state"""
    pass
