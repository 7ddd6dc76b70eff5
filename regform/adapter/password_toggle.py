"""
PasswordToggle - press-and-hold reveal for the password input.

Purely presentational; it never touches field values or validation.
"""

MASKED = "password"
REVEALED = "text"


class PasswordToggle:
    """Reveals the password while the control is held down."""

    def __init__(self):
        self.input_type = MASKED

    @property
    def revealed(self) -> bool:
        return self.input_type == REVEALED

    def press(self) -> None:
        self.input_type = REVEALED

    def release(self) -> None:
        self.input_type = MASKED

    def leave(self) -> None:
        # Pointer left the control while held
        self.input_type = MASKED
