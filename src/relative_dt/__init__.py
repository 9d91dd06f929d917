"""
Parsing of absolute and relative time values.

Values may be Unix epochs ("1445535988.5"), timestamps in a strptime layout, or an anchor name followed by a signed duration expression ("now+1d3w4mo-7y6h4m", "start-2.5years").
	>>> start = Instant.fromtimestamp(1057158245)
	>>> add_duration(start, "+2.5years").as_iso()
	'2006-01-02T15:04:05Z'
	>>> parse_with_map(layouts.RFC3339, "start+1week", {"start": start}).as_iso()
	'2003-07-09T15:04:05Z'
"""

import logging

from . import layouts
from .duration import DurationEvaluator, Offset, Token, add_duration, parse_offset
from .errors import InvalidNumber, LayoutMismatch, MalformedSign, ParseError, TrailingGarbage, UnknownUnit
from .instant import Instant, get_timezone
from .resolver import Resolver, parse, parse_epoch, parse_now, parse_with_map
from .units import DAYS, DEFAULT_UNITS, DURATION, MONTHS, YEARS, Unit, UnitTable

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
	"layouts",
	"DurationEvaluator", "Offset", "Token", "add_duration", "parse_offset",
	"InvalidNumber", "LayoutMismatch", "MalformedSign", "ParseError", "TrailingGarbage", "UnknownUnit",
	"Instant", "get_timezone",
	"Resolver", "parse", "parse_epoch", "parse_now", "parse_with_map",
	"DAYS", "DEFAULT_UNITS", "DURATION", "MONTHS", "YEARS", "Unit", "UnitTable",
]
