import datetime
import fractions
import logging
import math
import re

import dateutil.parser

from .duration import default_evaluator
from .errors import LayoutMismatch, ParseError
from .instant import NANOS, Instant, get_timezone, localize

logger = logging.getLogger(__name__)

# Unsigned only: negative numerals fall through to the layout parser
epoch_re = re.compile(r"\+?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]{1,3})?")


def cast_str(s) -> str:
	if isinstance(s, memoryview):
		s = bytes(s)
	if isinstance(s, bytes):
		s = s.decode("utf-8", "replace")
	return str(s)

def parse_epoch(value, tz=None):
	"""
	Parses a non-negative Unix epoch in seconds, such as "1445535988.5". Returns None if value is not one.

	The whole part gives the seconds and the fractional part is truncated to nanoseconds. The conversion is exact, so "0.3" is 300000000 nanoseconds and not 299999999.
	"""
	if not epoch_re.fullmatch(value) or not math.isfinite(float(value)):
		return None
	seconds, partial = divmod(fractions.Fraction(value), 1)
	try:
		return Instant.fromtimestamp(seconds, math.trunc(partial * NANOS), tz=tz)
	except (ValueError, OverflowError, OSError) as ex:
		raise ParseError(f"Epoch {value!r} is out of range", value=value) from ex


class Resolver:
	"""
	Turns a raw time value into an Instant.

	A value is tried, in order, as:
		1. A non-negative Unix epoch ("1445535988.5").
		2. An anchor name followed by a duration expression ("now-1h", "start+1week"). The longest anchor name that prefixes the value wins, and the rest of the value is evaluated relative to that anchor.
		3. A timestamp in the given layout. A layout of None uses dateutil's free-form parser instead of strptime.

	No anchors are implied: to resolve "now+1d", pass {"now": Instant.now()} or use parse_now().

	Parameters:
		evaluator (DurationEvaluator, optional): Evaluates the duration part of anchored values.
		tz (str | int | tzinfo, optional): Timezone for epochs and for timestamps that carry no offset. Defaults to UTC.
	"""

	def __init__(self, evaluator=None, tz=None):
		self.evaluator = default_evaluator if evaluator is None else evaluator
		self.tz = get_timezone(tz)

	def match_anchor(self, value, anchors):
		"Finds the longest anchor name that is a prefix of value, returning (name, remainder), or None. Empty names never match."
		if not anchors:
			return None
		name = max((k for k in anchors if k and value.startswith(k)), key=len, default=None)
		if name is None:
			return None
		return name, value[len(name):]

	def resolve(self, layout, value, anchors=None) -> Instant:
		"""
		Resolves a value to an Instant.

		Raises:
			ParseError: The duration after an anchor is malformed, or an epoch is out of range.
			LayoutMismatch: The value is neither an epoch nor anchored, and does not match the layout.
		"""
		value = cast_str(value)
		epoch = parse_epoch(value, tz=self.tz)
		if epoch is not None:
			logger.debug("Parsed %r as a Unix epoch", value)
			return epoch
		match = self.match_anchor(value, anchors)
		if match:
			name, expr = match
			logger.debug("Resolving %r relative to anchor %r", expr, name)
			return self.evaluator.evaluate(anchors[name], expr)
		return self.parse_layout(layout, value)

	def parse_layout(self, layout, value) -> Instant:
		"Parses a timestamp with strptime, or with dateutil when layout is None. Timestamps without an offset are placed in the resolver's timezone."
		try:
			if layout is None:
				dt = dateutil.parser.parse(value)
			else:
				dt = datetime.datetime.strptime(value, layout)
		except (ValueError, OverflowError) as ex:
			raise LayoutMismatch(f"Cannot parse {value!r} as {layout!r}: {ex}", layout, value=value) from ex
		logger.debug("Parsed %r with layout %r", value, layout)
		if dt.tzinfo is None:
			dt = localize(dt, self.tz)
		return Instant.fromdatetime(dt)


default_resolver = Resolver()

def get_resolver(tz=None) -> Resolver:
	return default_resolver if tz is None else Resolver(tz=tz)

def parse(layout, value, tz=None) -> Instant:
	"Parses an epoch or a timestamp in the given layout. No anchors are recognised."
	return get_resolver(tz).resolve(layout, value)

def parse_with_map(layout, value, anchors, tz=None) -> Instant:
	"""
	Parses an epoch, an anchored duration expression, or a timestamp in the given layout.
		>>> start = Instant.fromtimestamp(1136214245)
		>>> parse_with_map(None, "start+1week", {"start": start}).as_iso()
		'2006-01-09T15:04:05Z'
	"""
	return get_resolver(tz).resolve(layout, value, anchors)

def parse_now(layout, value, tz=None, anchors=None) -> Instant:
	"""
	Like parse_with_map, with "now" bound to the current time. Caller anchors take precedence, including a caller-supplied "now".
		>>> parse_now(None, "now-15m") < Instant.now()
		True
	"""
	resolver = get_resolver(tz)
	temp = {"now": Instant.now(tz=resolver.tz)}
	if anchors:
		temp.update(anchors)
	return resolver.resolve(layout, value, temp)
