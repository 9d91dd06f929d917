"""
Evaluation of signed duration expressions such as "+1d3w4mo-7y6h4m" or "-2.5years".

An expression is a run of tokens, each made of an optional sign, a decimal number, and a unit spelling. Tokens are summed per domain: linear durations (nanoseconds up to hours), calendar days (days and weeks), calendar months and calendar years. Fractional calendar amounts are pushed down into smaller units before being applied, using the fixed approximations 1 year = 12 months, 1 month = 30 days and 1 day = 24 hours. A fractional year or month is therefore not calendar-exact.

The totals are applied to a base instant in a fixed order: years, months and days on the calendar first, then the linear duration on the absolute timeline.
	>>> base = Instant.fromtimestamp(1054479845)
	>>> add_duration(base, "+2.5months").as_iso()
	'2003-08-16T15:04:05Z'
"""

import collections
import fractions
import logging
import math
import re

from .errors import InvalidNumber, MalformedSign, ParseError, TrailingGarbage, UnknownUnit
from .instant import Instant
from .units import DAYS, DEFAULT_UNITS, DURATION, HOUR, MONTHS, YEARS

logger = logging.getLogger(__name__)

DIGITS = frozenset("0123456789")
SIGNS = {"+": 1, "-": -1}
quantity_re = re.compile(r"[0-9]+(?:\.[0-9]+)?")

MONTHS_PER_YEAR = 12
DAYS_PER_MONTH = 30
HOURS_PER_DAY = 24

# Scanner states
NUMBER = "number"
UNIT = "unit"

Token = collections.namedtuple("Token", ("sign", "quantity", "unit"))
Offset = collections.namedtuple("Offset", ("years", "months", "days", "nanoseconds"), defaults=(0, 0, 0, 0))


def scan(expr):
	"""
	Splits a duration expression into (sign, number, unit) string triples, one at a time.

	The scanner alternates between reading a number and reading a unit. A sign or a digit arriving while a unit is being read closes the current token. The sign is None when the token has none.

	Raises:
		MalformedSign: A sign is not followed by digits.
		InvalidNumber: A unit has no number in front of it.
		TrailingGarbage: A number has no unit after it.
	"""
	sign = None
	number = []
	unit = []
	state = NUMBER
	for c in expr:
		if state is UNIT and (c in SIGNS or c in DIGITS):
			yield sign, "".join(number), "".join(unit)
			sign = None
			number.clear()
			unit.clear()
			state = NUMBER
		if c in SIGNS:
			if number:
				raise TrailingGarbage(f"Missing unit after {''.join(number)!r} in duration {expr!r}", value=expr)
			if sign is not None:
				raise MalformedSign(f"Sign without digits in duration {expr!r}", value=expr)
			sign = SIGNS[c]
		elif state is NUMBER and (c in DIGITS or c == "." and number and "." not in number):
			number.append(c)
		else:
			if state is NUMBER and not number:
				if sign is not None:
					raise MalformedSign(f"Sign without digits in duration {expr!r}", value=expr)
				raise InvalidNumber(f"Missing number before {c!r} in duration {expr!r}", value=expr)
			state = UNIT
			unit.append(c)
	if state is UNIT:
		yield sign, "".join(number), "".join(unit)
	elif number:
		raise TrailingGarbage(f"Missing unit after {''.join(number)!r} in duration {expr!r}", value=expr)
	elif sign is not None:
		raise MalformedSign(f"Sign without digits in duration {expr!r}", value=expr)

def parse_quantity(s, expr=None) -> fractions.Fraction:
	"Parses an unsigned decimal number exactly."
	if not quantity_re.fullmatch(s):
		raise InvalidNumber(f"Invalid number {s!r} in duration {expr!r}", value=expr)
	return fractions.Fraction(s)

def split(x):
	"Splits a number into its integer part and the remainder, both keeping the sign of x."
	whole = math.trunc(x)
	return whole, x - whole


class Accumulator:
	"Running totals of one duration expression, one per domain."

	__slots__ = ("years", "months", "days", "nanoseconds")

	fields = {
		YEARS: "years",
		MONTHS: "months",
		DAYS: "days",
		DURATION: "nanoseconds",
	}

	def __init__(self):
		self.years = 0
		self.months = 0
		self.days = 0
		self.nanoseconds = 0

	def add(self, token):
		k = self.fields[token.unit.domain]
		setattr(self, k, getattr(self, k) + token.sign * token.quantity * token.unit.multiplier)
		return self

	def resolve(self) -> Offset:
		"""
		Pushes fractional calendar amounts down into smaller units and returns the whole-number Offset.

		Fractional years become months (x12), fractional months become days (x30), and fractional days become hours (x24) of linear duration. Anything below a nanosecond is dropped. All integer parts are truncated toward zero, so "-2.5years" mirrors "+2.5years" exactly.
		"""
		years, partial = split(self.years)
		months, partial = split(self.months + partial * MONTHS_PER_YEAR)
		days, partial = split(self.days + partial * DAYS_PER_MONTH)
		nanoseconds = math.trunc(self.nanoseconds + partial * HOURS_PER_DAY * HOUR)
		return Offset(years, months, days, nanoseconds)


class DurationEvaluator:
	"""
	Applies duration expressions to instants.

	Parameters:
		units (UnitTable, optional): The unit spellings to recognise. Defaults to DEFAULT_UNITS.
	"""

	def __init__(self, units=None):
		self.units = DEFAULT_UNITS if units is None else units

	def tokens(self, expr):
		"Lazily yields a Token for each signed number and unit in the expression."
		for sign, number, unit in scan(expr):
			quantity = parse_quantity(number, expr)
			try:
				u = self.units[unit]
			except KeyError:
				raise UnknownUnit(f"Unknown unit {unit!r} in duration {expr!r}", unit, value=expr) from None
			yield Token(sign or 1, quantity, u)

	def accumulate(self, expr) -> Offset:
		"Sums an expression into a whole-number Offset, without applying it to any instant."
		acc = Accumulator()
		for token in self.tokens(expr):
			acc.add(token)
		return acc.resolve()

	def evaluate(self, base, expr) -> Instant:
		"""
		Returns base moved by a duration expression.

		An empty expression returns base unchanged. On failure a ParseError is raised carrying the unmodified base as its base attribute.

		Raises:
			MalformedSign, InvalidNumber, UnknownUnit, TrailingGarbage: The expression is malformed.
			ParseError: The result falls outside the range of representable dates.
		"""
		base = Instant.fromdatetime(base)
		if not expr:
			return base
		try:
			offset = self.accumulate(expr)
		except ParseError as ex:
			ex.base = base
			raise
		try:
			return apply_offset(base, offset)
		except (ValueError, OverflowError, OSError) as ex:
			raise ParseError(f"Duration {expr!r} moves {base} out of range", value=expr, base=base) from ex


def apply_offset(base, offset) -> Instant:
	"Adds an Offset to an instant: years, months and days on the calendar, then the linear duration."
	logger.debug("Applying %r to %s", offset, base)
	return base.add_date(offset.years, offset.months, offset.days).add_nanoseconds(offset.nanoseconds)


default_evaluator = DurationEvaluator()

def add_duration(base, expr) -> Instant:
	"Returns base moved by a duration expression, using the default unit table."
	return default_evaluator.evaluate(base, expr)

def parse_offset(expr) -> Offset:
	"Parses a duration expression into an Offset, using the default unit table."
	return default_evaluator.accumulate(expr)
