import datetime
import fractions
import functools
import math
import time

import pytz
from dateutil.relativedelta import relativedelta

number = int | float
NANOS = 10 ** 9

# Zone names are matched case-insensitively, e.g. "europe/london"
ZONE_NAMES = {tz.casefold(): tz for tz in pytz.all_timezones}


def get_timezone(tz=None) -> datetime.tzinfo:
	"Gets a timezone from a zone name, a number of minutes east of UTC, or an existing tzinfo. Defaults to UTC."
	if tz is None:
		return datetime.timezone.utc
	if isinstance(tz, datetime.tzinfo):
		return tz
	if isinstance(tz, number):
		return pytz.FixedOffset(round(tz))
	try:
		name = ZONE_NAMES[tz.casefold()]
	except KeyError:
		raise ValueError(f"Unknown timezone {tz!r}") from None
	return pytz.timezone(name)

def localize(naive, tz) -> datetime.datetime:
	"Attaches a timezone to a naive wall-clock datetime. pytz zones pick the offset in effect at that wall time."
	if hasattr(tz, "localize"):
		# normalize moves wall times inside a DST gap to a time that exists
		return tz.normalize(tz.localize(naive))
	return naive.replace(tzinfo=tz)

def format_offset(offset) -> str:
	if not offset:
		return "Z"
	minutes = round(offset.total_seconds() / 60)
	negative, minutes = minutes < 0, abs(minutes)
	return "+-"[negative] + "%02d:%02d" % divmod(minutes, 60)


@functools.total_ordering
class Instant:
	"""
	An immutable point in time with nanosecond resolution.

	Internally an Instant is a timezone-aware datetime truncated to whole seconds, plus a nanosecond count within that second. Naive datetimes are taken to be UTC. Every operation returns a new Instant.

	Calendar arithmetic (add_years, add_months, add_days) works on the wall clock of the instant's timezone, so adding a day across a DST change keeps the local time of day. Linear arithmetic (add_nanoseconds, adding a timedelta) works on the absolute timeline.

	Equality and ordering compare the absolute point in time, regardless of timezone.
		>>> t = Instant.fromtimestamp(1445535988, 500000000)
		>>> t.as_iso()
		'2015-10-22T17:46:28.5Z'
		>>> t.add_months(1).as_iso()
		'2015-11-22T17:46:28.5Z'
	"""

	__slots__ = ("_dt", "_nanosecond")

	def __init__(self, dt, nanosecond=0):
		if not isinstance(dt, datetime.datetime):
			raise TypeError(f"Expected a datetime, got {type(dt).__name__}")
		if not 0 <= nanosecond < NANOS:
			raise ValueError(f"nanosecond must be in range [0, {NANOS}), got {nanosecond}")
		if dt.tzinfo is None:
			dt = dt.replace(tzinfo=datetime.timezone.utc)
		object.__setattr__(self, "_dt", dt.replace(microsecond=0))
		object.__setattr__(self, "_nanosecond", int(nanosecond))

	def __setattr__(self, k, v):
		raise AttributeError(f"{self.__class__.__name__} is immutable")

	def __delattr__(self, k):
		raise AttributeError(f"{self.__class__.__name__} is immutable")

	def __getstate__(self):
		return self._dt, self._nanosecond

	def __setstate__(self, s):
		dt, nanosecond = s
		object.__setattr__(self, "_dt", dt)
		object.__setattr__(self, "_nanosecond", nanosecond)

	@classmethod
	def fromtimestamp(cls, seconds, nanosecond=0, tz=None):
		"Creates an Instant from whole Unix seconds and nanoseconds, displayed in the given timezone (UTC by default)."
		extra, nanosecond = divmod(int(nanosecond), NANOS)
		dt = datetime.datetime.fromtimestamp(int(seconds) + extra, tz=get_timezone(tz))
		return cls(dt, nanosecond)

	@classmethod
	def fromdatetime(cls, dt, nanosecond=None):
		if isinstance(dt, cls):
			return dt
		if nanosecond is None:
			nanosecond = dt.microsecond * 1000
		return cls(dt, nanosecond)

	@classmethod
	def now(cls, tz=None):
		seconds, nanosecond = divmod(time.time_ns(), NANOS)
		return cls.fromtimestamp(seconds, nanosecond, tz=tz)

	@property
	def year(self) -> int:
		return self._dt.year

	@property
	def month(self) -> int:
		return self._dt.month

	@property
	def day(self) -> int:
		return self._dt.day

	@property
	def hour(self) -> int:
		return self._dt.hour

	@property
	def minute(self) -> int:
		return self._dt.minute

	@property
	def second(self) -> int:
		return self._dt.second

	@property
	def nanosecond(self) -> int:
		return self._nanosecond

	@property
	def microsecond(self) -> int:
		return self._nanosecond // 1000

	@property
	def tzinfo(self) -> datetime.tzinfo:
		return self._dt.tzinfo

	def unix(self) -> int:
		"Returns the whole Unix seconds of this instant."
		return round(self._dt.timestamp())

	def unix_nano(self) -> int:
		return self.unix() * NANOS + self._nanosecond

	def timestamp_exact(self) -> fractions.Fraction:
		"Returns the full Unix timestamp as an exact fraction."
		return self.unix() + fractions.Fraction(self._nanosecond, NANOS)

	def to_datetime(self) -> datetime.datetime:
		"Converts to a standard datetime. Nanoseconds are truncated to microseconds."
		return self._dt.replace(microsecond=self.microsecond)

	def cast(self, tz=None):
		"Returns the same instant displayed in another timezone."
		return self.fromtimestamp(self.unix(), self._nanosecond, tz=tz)

	def _shift(self, delta):
		tz = self._dt.tzinfo
		wall = self._dt.replace(tzinfo=None) + delta
		return self.__class__(localize(wall, tz), self._nanosecond)

	def add_years(self, years=1):
		if not years:
			return self
		return self._shift(relativedelta(years=years))

	def add_months(self, months=1):
		"Adds calendar months. A day of month past the end of the target month is clamped to its last day."
		if not months:
			return self
		return self._shift(relativedelta(months=months))

	def add_days(self, days=1):
		if not days:
			return self
		return self._shift(relativedelta(days=days))

	def add_date(self, years=0, months=0, days=0):
		"Adds whole years, then whole months, then whole days, each on the calendar."
		return self.add_years(years).add_months(months).add_days(days)

	def add_nanoseconds(self, nanoseconds):
		"Moves along the absolute timeline by a number of nanoseconds."
		if not nanoseconds:
			return self
		seconds, nanosecond = divmod(self._nanosecond + int(nanoseconds), NANOS)
		return self.fromtimestamp(self.unix() + seconds, nanosecond, tz=self._dt.tzinfo)

	def __add__(self, other):
		if isinstance(other, datetime.timedelta):
			return self.add_nanoseconds(timedelta_nanos(other))
		return NotImplemented
	__radd__ = __add__

	def __sub__(self, other):
		if isinstance(other, datetime.timedelta):
			return self.add_nanoseconds(-timedelta_nanos(other))
		if isinstance(other, self.__class__):
			# truncated toward zero
			return datetime.timedelta(microseconds=math.trunc(fractions.Fraction(self.unix_nano() - other.unix_nano(), 1000)))
		return NotImplemented

	def __eq__(self, other):
		if not isinstance(other, self.__class__):
			return NotImplemented
		return self.unix_nano() == other.unix_nano()

	def __lt__(self, other):
		if not isinstance(other, self.__class__):
			return NotImplemented
		return self.unix_nano() < other.unix_nano()

	def __hash__(self):
		return hash(self.unix_nano())

	def as_iso(self) -> str:
		"Converts to an RFC 3339 timestamp, with as many fractional digits as needed."
		time = f"{'%04d' % self.year}-{'%02d' % self.month}-{'%02d' % self.day}T{'%02d' % self.hour}:{'%02d' % self.minute}:{'%02d' % self.second}"
		if self._nanosecond:
			time += ("." + "%09d" % self._nanosecond).rstrip("0")
		return time + format_offset(self._dt.utcoffset())
	isoformat = as_iso

	def __str__(self):
		return self.as_iso()

	def __repr__(self):
		return self.__class__.__name__ + f"({self._dt!r}, nanosecond={self._nanosecond})"


def timedelta_nanos(td) -> int:
	return ((td.days * 86400 + td.seconds) * 10 ** 6 + td.microseconds) * 1000
