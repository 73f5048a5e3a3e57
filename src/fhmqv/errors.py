class FHMQVError(Exception):
    pass

class BadElement(FHMQVError, ValueError):
    """The bytes do not encode an element of this group."""

class UnknownRole(FHMQVError):
    """An engine needs to be either the Initiator or the Responder."""

class WrongGroupError(FHMQVError):
    """Key material was produced under different parameters."""
