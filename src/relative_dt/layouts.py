"Common timestamp layouts, as datetime.strptime format strings."

# 2006-01-02T15:04:05Z, 2006-01-02T15:04:05+07:00
RFC3339 = "%Y-%m-%dT%H:%M:%S%z"
# 2006-01-02T15:04:05.999999Z
RFC3339_MICRO = "%Y-%m-%dT%H:%M:%S.%f%z"
# Mon Jan  2 15:04:05 2006
ANSIC = "%a %b %d %H:%M:%S %Y"
# Mon, 02 Jan 2006 15:04:05 GMT
RFC1123 = "%a, %d %b %Y %H:%M:%S %Z"
# Mon, 02 Jan 2006 15:04:05 -0700
RFC1123Z = "%a, %d %b %Y %H:%M:%S %z"
DATETIME = "%Y-%m-%d %H:%M:%S"
DATEONLY = "%Y-%m-%d"
TIMEONLY = "%H:%M:%S"
