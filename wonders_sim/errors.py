class IllegalActionError(ValueError):
    """A decision strategy kept proposing actions the game refuses."""
