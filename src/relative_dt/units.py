import collections
import collections.abc
import types

DURATION = "duration"
DAYS = "days"
MONTHS = "months"
YEARS = "years"
DOMAINS = (DURATION, DAYS, MONTHS, YEARS)

Unit = collections.namedtuple("Unit", ("name", "domain", "multiplier"))
Unit.__doc__ = "A unit of time. The multiplier is in nanoseconds for the duration domain, and in units of the domain otherwise (a week is 7 days)."

MICROSECOND = 1000
MILLISECOND = 1000 * MICROSECOND
SECOND = 1000 * MILLISECOND
MINUTE = 60 * SECOND
HOUR = 60 * MINUTE

UNITS = dict(
	nanoseconds=Unit("nanoseconds", DURATION, 1),
	microseconds=Unit("microseconds", DURATION, MICROSECOND),
	milliseconds=Unit("milliseconds", DURATION, MILLISECOND),
	seconds=Unit("seconds", DURATION, SECOND),
	minutes=Unit("minutes", DURATION, MINUTE),
	hours=Unit("hours", DURATION, HOUR),
	days=Unit("days", DAYS, 1),
	weeks=Unit("weeks", DAYS, 7),
	months=Unit("months", MONTHS, 1),
	years=Unit("years", YEARS, 1),
)
SPELLINGS = {
	"nanoseconds": ("ns",),
	# The micro sign (U+00B5) and the Greek small letter mu (U+03BC) are both in common use
	"microseconds": ("us", "µs", "μs"),
	"milliseconds": ("ms",),
	"seconds": ("s", "sec", "second", "seconds"),
	"minutes": ("m", "min", "minute", "minutes"),
	"hours": ("h", "hr", "hour", "hours"),
	"days": ("d", "day", "days"),
	"weeks": ("w", "week", "weeks"),
	"months": ("mo", "mon", "month", "months", "mth", "mn"),
	"years": ("y", "year", "years"),
}


class UnitTable(collections.abc.Mapping):
	"""
	Immutable, case-sensitive mapping from unit spelling to Unit.

	Tables are never modified in place; extend() and without() return new tables, so one table may be shared by any number of evaluators and threads.
		>>> table = DEFAULT_UNITS.extend({"fortnight": (DAYS, 14), "hrs": "hours"})
		>>> table["fortnight"]
		Unit(name='fortnight', domain='days', multiplier=14)
		>>> "m" in DEFAULT_UNITS.without("m")
		False
	"""

	__slots__ = ("_units",)

	def __init__(self, units=()):
		temp = {}
		for spelling, unit in dict(units).items():
			if not spelling:
				raise ValueError("Unit spellings may not be empty")
			if any(c in "0123456789+-" for c in spelling):
				raise ValueError(f"Unit spelling {spelling!r} may not contain digits or signs")
			if unit.domain not in DOMAINS:
				raise ValueError(f"Unknown domain {unit.domain!r} for unit {spelling!r}")
			temp[spelling] = unit
		self._units = types.MappingProxyType(temp)

	@classmethod
	def from_spellings(cls, spellings, units=UNITS):
		return cls({s: units[name] for name, v in spellings.items() for s in v})

	def __getitem__(self, k):
		return self._units[k]

	def __iter__(self):
		return iter(self._units)

	def __len__(self):
		return len(self._units)

	def __repr__(self):
		return self.__class__.__name__ + f"({dict(self._units)!r})"

	def extend(self, spellings):
		"""
		Returns a new table with extra spellings.

		Each value may be the name of a unit already in the table ("hours"), a (domain, multiplier) pair, or a Unit.
		"""
		names = {unit.name: unit for unit in self._units.values()}
		temp = dict(self._units)
		for spelling, v in spellings.items():
			if isinstance(v, Unit):
				unit = v
			elif isinstance(v, str):
				try:
					unit = names[v]
				except KeyError:
					raise ValueError(f"Unknown unit name {v!r}") from None
			else:
				domain, multiplier = v
				unit = Unit(spelling, domain, multiplier)
			temp[spelling] = unit
		return self.__class__(temp)

	def without(self, *spellings):
		"Returns a new table without the given spellings."
		return self.__class__({k: v for k, v in self._units.items() if k not in spellings})


DEFAULT_UNITS = UnitTable.from_spellings(SPELLINGS)
