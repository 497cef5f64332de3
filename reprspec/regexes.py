# Copyright (c) 2026 NASK. All rights reserved.

"""
Regular expression objects used in other parts of the *reprspec*
library.
"""


import re


#: Word boundary inside a *CamelCase* name.
#:
#: Used to derive the default wrap key from a schema name.
CAMEL_CASE_BOUNDARY_REGEX = re.compile(r'''
    (?<=[a-z0-9])(?=[A-Z])
|
    (?<=[A-Z])(?=[A-Z][a-z])
''', re.ASCII | re.VERBOSE)


#: A date followed by a time (as in an *ISO-8601* combined date and
#: time), e.g.: `2013-06-12T10:02`, `20130612 1002`.
#:
#: Used to reject date-only input where a date+time is required.
DATE_FOLLOWED_BY_TIME_REGEX = re.compile(r'\d[T ]\d', re.ASCII)
