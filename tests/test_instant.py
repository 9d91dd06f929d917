import datetime
import pickle
import time
import unittest
from fractions import Fraction

import pytz

from relative_dt import Instant, get_timezone


class TestGetTimezone(unittest.TestCase):

	def test_default_is_utc(self):
		self.assertIs(get_timezone(), datetime.timezone.utc)

	def test_names_ignore_case(self):
		self.assertEqual(get_timezone("europe/london").zone, "Europe/London")
		self.assertIs(get_timezone("UTC"), pytz.utc)

	def test_minutes_offset(self):
		tz = get_timezone(-420)
		self.assertEqual(tz.utcoffset(None), datetime.timedelta(hours=-7))

	def test_tzinfo_passthrough(self):
		tz = datetime.timezone(datetime.timedelta(hours=2))
		self.assertIs(get_timezone(tz), tz)

	def test_unknown(self):
		with self.assertRaises(ValueError):
			get_timezone("Atlantis/Capital")


class TestInstant(unittest.TestCase):

	def test_fromtimestamp(self):
		t = Instant.fromtimestamp(1445535988, 500000000)
		self.assertEqual(t.unix(), 1445535988)
		self.assertEqual(t.nanosecond, 500000000)
		self.assertEqual(t.microsecond, 500000)
		self.assertEqual((t.year, t.month, t.day, t.hour, t.minute, t.second), (2015, 10, 22, 17, 46, 28))
		self.assertEqual(t.as_iso(), "2015-10-22T17:46:28.5Z")

	def test_fromtimestamp_carries_nanoseconds(self):
		t = Instant.fromtimestamp(10, 2500000000)
		self.assertEqual((t.unix(), t.nanosecond), (12, 500000000))

	def test_naive_datetime_is_utc(self):
		t = Instant(datetime.datetime(2006, 1, 2, 15, 4, 5))
		self.assertEqual(t.unix(), 1136214245)
		self.assertEqual(t.as_iso(), "2006-01-02T15:04:05Z")

	def test_fromdatetime_keeps_microseconds(self):
		t = Instant.fromdatetime(datetime.datetime(2006, 1, 2, 15, 4, 5, 250, tzinfo=datetime.timezone.utc))
		self.assertEqual(t.nanosecond, 250000)
		self.assertIs(Instant.fromdatetime(t), t)

	def test_invalid_nanosecond(self):
		with self.assertRaises(ValueError):
			Instant(datetime.datetime(2006, 1, 2), nanosecond=10 ** 9)
		with self.assertRaises(TypeError):
			Instant(1136214245)

	def test_immutable(self):
		t = Instant.fromtimestamp(0)
		with self.assertRaises(AttributeError):
			t._nanosecond = 5
		with self.assertRaises(AttributeError):
			del t._dt
		self.assertEqual(t.unix(), 0)

	def test_difference_truncates_toward_zero(self):
		a = Instant.fromtimestamp(0, 1)
		b = Instant.fromtimestamp(0, 1500)
		self.assertEqual(b - a, datetime.timedelta(microseconds=1))
		self.assertEqual(a - b, datetime.timedelta(microseconds=-1))

	def test_as_iso_offset(self):
		t = Instant.fromtimestamp(1136214245, tz=-420)
		self.assertEqual(t.as_iso(), "2006-01-02T08:04:05-07:00")
		self.assertEqual(str(Instant.fromtimestamp(0, 1000)), "1970-01-01T00:00:00.000001Z")

	def test_equality_ignores_timezone(self):
		utc = Instant.fromtimestamp(1136214245)
		tokyo = utc.cast("Asia/Tokyo")
		self.assertEqual(tokyo.hour, 0)
		self.assertEqual(tokyo, utc)
		self.assertEqual(hash(tokyo), hash(utc))
		self.assertNotEqual(utc, utc.to_datetime())

	def test_ordering(self):
		a = Instant.fromtimestamp(5, 1)
		b = Instant.fromtimestamp(5, 2)
		self.assertLess(a, b)
		self.assertGreaterEqual(b, a)
		self.assertEqual(sorted([b, a]), [a, b])

	def test_timestamp_exact(self):
		self.assertEqual(Instant.fromtimestamp(1, 250000000).timestamp_exact(), Fraction(5, 4))
		self.assertEqual(Instant.fromtimestamp(1, 250000000).unix_nano(), 1250000000)

	def test_to_datetime_truncates(self):
		dt = Instant.fromtimestamp(0, 1999).to_datetime()
		self.assertEqual(dt.microsecond, 1)
		self.assertEqual(dt.tzinfo, datetime.timezone.utc)

	def test_add_nanoseconds(self):
		t = Instant.fromtimestamp(10, 999999999).add_nanoseconds(2)
		self.assertEqual((t.unix(), t.nanosecond), (11, 1))
		t = Instant.fromtimestamp(10).add_nanoseconds(-1)
		self.assertEqual((t.unix(), t.nanosecond), (9, 999999999))

	def test_timedelta_arithmetic(self):
		t = Instant.fromtimestamp(10)
		later = t + datetime.timedelta(seconds=1, microseconds=5)
		self.assertEqual((later.unix(), later.nanosecond), (11, 5000))
		self.assertEqual(later - t, datetime.timedelta(seconds=1, microseconds=5))
		self.assertEqual(later - datetime.timedelta(seconds=1, microseconds=5), t)
		self.assertEqual(datetime.timedelta(days=1) + t, t.add_days(1))

	def test_add_months_clamps(self):
		t = Instant(datetime.datetime(2004, 1, 31, 12))
		self.assertEqual(t.add_months(1), Instant(datetime.datetime(2004, 2, 29, 12)))
		self.assertEqual(t.add_months(-2), Instant(datetime.datetime(2003, 11, 30, 12)))

	def test_add_years_leap_day(self):
		t = Instant(datetime.datetime(2004, 2, 29))
		self.assertEqual(t.add_years(1), Instant(datetime.datetime(2005, 2, 28)))

	def test_add_date_keeps_nanoseconds(self):
		t = Instant(datetime.datetime(2004, 2, 29), nanosecond=7).add_date(1, 1, 1)
		self.assertEqual(t, Instant(datetime.datetime(2005, 3, 29), nanosecond=7))

	def test_now(self):
		before = time.time_ns()
		t = Instant.now()
		after = time.time_ns()
		self.assertTrue(before <= t.unix_nano() <= after)
		self.assertEqual(Instant.now(tz="Asia/Tokyo").tzinfo.zone, "Asia/Tokyo")

	def test_pickle(self):
		t = Instant.fromtimestamp(1445535988, 123, tz="Europe/London")
		u = pickle.loads(pickle.dumps(t))
		self.assertEqual(u, t)
		self.assertEqual(u.as_iso(), t.as_iso())


if __name__ == "__main__":
	unittest.main()
