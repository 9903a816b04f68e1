"""Exceptions raised by the harness itself."""


class HarnessError(Exception):
    """Misuse of the harness (e.g. END_TEST outside a running test)."""


class RegistrationError(HarnessError):
    """A test case could not be registered."""


class DuplicateTestError(RegistrationError):
    def __init__(self, name: str):
        super().__init__(f"Duplicate test case name: {name}")
        self.name = name


class EndTestError(HarnessError):
    """END_TEST() called outside a running test case, or twice in one."""
