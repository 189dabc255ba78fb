class OTPError(Exception):
    """
    Base class for errors raised by totpkit.
    """


class NullInputError(OTPError, TypeError):
    """
    A required input was None.
    """


class FormatError(OTPError, ValueError):
    """
    Base32 text contains a character outside the accepted alphabet.
    """


class InvalidArgumentError(OTPError, ValueError):
    """
    A numeric argument is outside its documented domain.
    """
