class UsageError(RuntimeError):
    """Raised when the library itself is used incorrectly.

    Misuse such as leaving a chain twice or attaching a response twice is a bug
    in the test code, not a property of the system under test, so it is never
    reported through the assertion handler.
    """
