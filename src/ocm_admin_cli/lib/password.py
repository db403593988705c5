"""Random password generation for the cluster admin."""

import secrets
from dataclasses import dataclass

from ocm_admin_cli.lib.errors import InvalidPasswordPolicyError, PasswordGenerationError
from ocm_admin_cli.lib.result import Err, Ok, Result

# Visually ambiguous characters (0/O, 1/l/I) are left out
LOWER_LETTERS = "abcdefghijkmnopqrstuvwxyz"
UPPER_LETTERS = "ABCDEFGHJKLMNPQRSTUVWXYZ"
DIGITS = "23456789"
ALPHABET = LOWER_LETTERS + UPPER_LETTERS + DIGITS


@dataclass(frozen=True)
class PasswordPolicy:
    """Shape of a generated password.

    The default gives 23 characters grouped as xxxxx-xxxxx-xxxxx-xxxxx.
    """

    length: int = 23
    separator: str = "-"
    separator_positions: tuple[int, ...] = (5, 11, 17)
    alphabet: str = ALPHABET

    def validate(self) -> Result[None, InvalidPasswordPolicyError]:
        if self.length <= 0:
            return Err(InvalidPasswordPolicyError(f"length must be positive, got {self.length}"))
        if not self.alphabet:
            return Err(InvalidPasswordPolicyError("alphabet is empty"))
        if len(self.separator) != 1 or self.separator in self.alphabet:
            return Err(
                InvalidPasswordPolicyError(
                    f"separator must be a single character outside the alphabet, got {self.separator!r}"
                )
            )
        for pos in self.separator_positions:
            if not 0 <= pos < self.length:
                return Err(
                    InvalidPasswordPolicyError(
                        f"separator position {pos} is outside a {self.length}-character password"
                    )
                )
        return Ok(None)


def generate_password(
    policy: PasswordPolicy | None = None,
) -> Result[str, PasswordGenerationError]:
    """Generate a password from a cryptographically strong source."""
    policy = policy or PasswordPolicy()

    match policy.validate():
        case Err(InvalidPasswordPolicyError(reason)):
            return Err(PasswordGenerationError(reason))
        case Ok(_):
            pass

    try:
        chars = [secrets.choice(policy.alphabet) for _ in range(policy.length)]
    except (OSError, NotImplementedError) as e:
        # No OS entropy source available
        return Err(PasswordGenerationError(str(e)))

    for pos in policy.separator_positions:
        chars[pos] = policy.separator
    return Ok("".join(chars))
