class ParseError(ValueError):
	"""
	Base class for every failure raised while parsing a time value.

	Attributes:
		value (str): The text that failed to parse.
		base (Instant | None): For duration expressions, the instant the expression was applied to, unmodified. Callers may fall back to it, although ignoring the error this way is rarely what is wanted.
	"""

	def __init__(self, message, value=None, base=None):
		super().__init__(message)
		self.value = value
		self.base = base


class MalformedSign(ParseError):
	"A + or - was not followed by any digits."


class InvalidNumber(ParseError):
	"A quantity could not be read as a decimal number."


class UnknownUnit(ParseError):
	"A unit spelling is not present in the unit table."

	def __init__(self, message, unit, value=None, base=None):
		super().__init__(message, value=value, base=base)
		self.unit = unit


class TrailingGarbage(ParseError):
	"A number was left without a unit."


class LayoutMismatch(ParseError):
	"The value does not match the layout. The parser's own exception is kept as __cause__."

	def __init__(self, message, layout, value=None):
		super().__init__(message, value=value)
		self.layout = layout
