#!/usr/bin/python3

# Copyright (C) 2007 Google Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#      http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""This module is a library to check a GTFS-realtime feed of trip updates
against the GTFS schedule it describes. Refer to the GTFS-realtime
reference, available at https://gtfs.org/realtime/reference/, for the
meaning of the checked fields.

To validate a feed you should do something like:

  import gtfsrtvalidator
  index = gtfsrtvalidator.LoadStaticScheduleIndex("google_transit.zip")
  feed = gtfsrtvalidator.LoadFeedSnapshot("tripupdates.pb")
  for group in gtfsrtvalidator.ValidateFeed(feed, index):
    print(group.GetRuleId(), len(group))

  FeedSnapshot, TripUpdate, StopTimeUpdate, StopTimeEvent: the decoded feed
  StaticScheduleIndex: stop_times of the static schedule, by trip_id
  StopTimeUpdateValidator: runs rules E002, E036, E037 and E040 to E045
  RuleGroup: the occurrences of one rule
  ProblemReporter: reports problems with the input files
"""

from .version import __version__
from .decoder import *
from .errors import *
from .feed import *
from .occurrences import *
from .problems import *
from .rules import *
from .schedule import *
from .util import *
from .validator import *
