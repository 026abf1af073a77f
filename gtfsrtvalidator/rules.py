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

"""Catalogue of the GTFS-realtime stop_time_update validation rules.

Each rule has an identifier such as "E002", a severity taken from
errors.ALL_TYPES, a title shown in reports and a suffix which is appended to
the text of every occurrence of the rule.
"""

from .errors import TYPE_ERROR, TYPE_WARNING


class ValidationRule(object):
    """A single validation rule. Instances are shared and never modified."""

    __slots__ = ("rule_id", "severity", "title", "occurrence_suffix")

    def __init__(self, rule_id, severity, title, occurrence_suffix):
        self.rule_id = rule_id
        self.severity = severity
        self.title = title
        self.occurrence_suffix = occurrence_suffix

    def IsError(self):
        return self.severity == TYPE_ERROR

    def IsWarning(self):
        return self.severity == TYPE_WARNING

    def __repr__(self):
        return "<ValidationRule %s>" % self.rule_id

    def __str__(self):
        return "%s - %s" % (self.rule_id, self.title)


E002 = ValidationRule(
    "E002",
    TYPE_ERROR,
    "stop_time_updates for a given trip_id must be sorted by increasing "
    "stop_sequence",
    "is not sorted by increasing stop_sequence",
)
E036 = ValidationRule(
    "E036",
    TYPE_ERROR,
    "Sequential stop_time_updates have the same stop_sequence",
    "- sequential stop_time_updates must not share a stop_sequence",
)
E037 = ValidationRule(
    "E037",
    TYPE_ERROR,
    "Sequential stop_time_updates have the same stop_id",
    "- sequential stop_time_updates must not share a stop_id",
)
E040 = ValidationRule(
    "E040",
    TYPE_ERROR,
    "stop_time_update doesn't contain stop_id or stop_sequence",
    "has a stop_time_update without stop_id or stop_sequence",
)
E041 = ValidationRule(
    "E041",
    TYPE_ERROR,
    "trip doesn't have any stop_time_updates",
    "has no stop_time_updates and is not CANCELED",
)
E042 = ValidationRule(
    "E042",
    TYPE_ERROR,
    "arrival or departure provided for NO_DATA stop_time_update",
    "but the stop_time_update schedule_relationship is NO_DATA",
)
E043 = ValidationRule(
    "E043",
    TYPE_ERROR,
    "stop_time_update doesn't have arrival or departure",
    "has neither arrival nor departure",
)
E044 = ValidationRule(
    "E044",
    TYPE_ERROR,
    "stop_time_update arrival/departure doesn't have delay or time",
    "has neither delay nor time",
)
E045 = ValidationRule(
    "E045",
    TYPE_ERROR,
    "GTFS-rt stop_time_update stop_sequence and stop_id do not match GTFS",
    "- stop_id does not match GTFS stop_times.txt",
)

# Report order of the rules checked by the StopTimeUpdateValidator.
STOP_TIME_UPDATE_RULES = (E002, E036, E037, E040, E041, E042, E043, E044, E045)

_RULES_BY_ID = dict((rule.rule_id, rule) for rule in STOP_TIME_UPDATE_RULES)


def GetRule(rule_id):
    """Return the ValidationRule named rule_id.

  Raises:
    KeyError if no rule has that identifier.
  """
    return _RULES_BY_ID[rule_id]


def GetRuleIds():
    return [rule.rule_id for rule in STOP_TIME_UPDATE_RULES]
