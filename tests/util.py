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

# Code shared between tests.


import os
import re
import shutil
import sys
import tempfile
import traceback
import unittest
import zipfile
from io import BytesIO
from io import StringIO

import gtfsrtvalidator
from gtfsrtvalidator import feed as feed_module


class TestCase(unittest.TestCase):
    """Base of every TestCase class in this project.

    This adds some methods that perhaps should be in unittest.TestCase.
    """

    def assertMatchesRegex(self, regex, string):
        """Assert that regex is found in string."""
        if not re.search(regex, string):
            self.fail("string %r did not match regex %r" % (string, regex))


class RedirectStdOutTestCaseBase(TestCase):
    """Save stdout to the StringIO buffer self.this_stdout"""

    def setUp(self):
        self.saved_stdout = sys.stdout
        self.this_stdout = StringIO()
        sys.stdout = self.this_stdout

    def tearDown(self):
        sys.stdout = self.saved_stdout
        self.this_stdout.close()


class TempDirTestCaseBase(TestCase):
    """Make a temporary directory the current directory before running the test
    and remove it after the test.
    """

    def setUp(self):
        self.tempdirpath = tempfile.mkdtemp()
        self._oldcwd = os.getcwd()
        os.chdir(self.tempdirpath)

    def tearDown(self):
        os.chdir(self._oldcwd)
        # Remove everything in self.tempdirpath
        shutil.rmtree(self.tempdirpath)

    def WriteFile(self, name, contents, mode="w"):
        path = os.path.join(self.tempdirpath, name)
        with open(path, mode) as f:
            f.write(contents)
        return path

    def WriteZip(self, name, file_dict):
        path = os.path.join(self.tempdirpath, name)
        with zipfile.ZipFile(path, "w") as z:
            for arcname, contents in file_dict.items():
                z.writestr(arcname, contents)
        return path


STOP_TIMES = (
    "trip_id,arrival_time,departure_time,stop_id,stop_sequence\n"
    "AB1,10:00:00,10:00:00,BEATTY_AIRPORT,1\n"
    "AB1,10:20:00,10:20:00,BULLFROG,2\n"
    "AB1,10:25:00,10:25:00,STAGECOACH,3\n"
    "CITY1,6:00:00,6:00:00,STAGECOACH,1\n"
    "CITY1,6:05:00,6:07:00,NANAA,5\n"
    "CITY1,6:12:00,6:14:00,NADAV,10\n"
)


def MakeZipFile(file_dict):
    """Return a BytesIO holding a zip archive of file_dict."""
    zip_buffer = BytesIO()
    with zipfile.ZipFile(zip_buffer, "a") as z:
        for arcname, contents in file_dict.items():
            z.writestr(arcname, contents)
    zip_buffer.seek(0)
    return zip_buffer


def Arrival(delay=None, time=None):
    return feed_module.StopTimeEvent(delay=delay, time=time)


Departure = Arrival


def Stop(stop_sequence=None, stop_id=None, schedule_relationship=None, **kwargs):
    """Return a StopTimeUpdate with an arrival delay unless one of arrival
    or departure is given as a keyword argument."""
    if "arrival" not in kwargs and "departure" not in kwargs:
        kwargs["arrival"] = Arrival(delay=0)
    return feed_module.StopTimeUpdate(
        stop_sequence=stop_sequence,
        stop_id=stop_id,
        schedule_relationship=schedule_relationship,
        **kwargs
    )


def Trip(trip_id, stops=(), schedule_relationship=None, entity_id=None):
    return feed_module.TripUpdate(
        trip_id=trip_id,
        schedule_relationship=schedule_relationship,
        stop_time_updates=stops,
        entity_id=entity_id,
    )


def Feed(*trip_updates):
    return feed_module.FeedSnapshot(trip_updates, timestamp=1500000000)


def MakeScheduleIndex(trips):
    """Return a StaticScheduleIndex from a dict of trip_id to a list of
    (stop_sequence, stop_id) tuples."""
    index = gtfsrtvalidator.StaticScheduleIndex()
    for trip_id, entries in trips.items():
        for stop_sequence, stop_id in entries:
            index.AddStopEntry(trip_id, stop_sequence, stop_id)
    return index


class RuleGroupRecorder(object):
    """Save the rule groups returned by a validator for later inspection.

    Args:
      test_case: a unittest.TestCase object on which to report failures
    """

    def __init__(self, test_case):
        self._test_case = test_case
        self.groups = []

    def Record(self, groups):
        self.groups.extend(groups)

    def PopRuleGroup(self, rule_id):
        """Return the first rule group, which must be for rule_id."""
        self._test_case.assertTrue(
            self.groups, "expected a %s group, found none" % rule_id
        )
        group = self.groups.pop(0)
        self._test_case.assertEqual(
            group.GetRuleId(),
            rule_id,
            "%s != %s\n%s"
            % (group.GetRuleId(), rule_id, self.FormatGroup(group)),
        )
        return group

    def PopOccurrences(self, rule_id, count=None):
        """Pop the group of rule_id and return its occurrence texts."""
        group = self.PopRuleGroup(rule_id)
        prefixes = [o.prefix for o in group.occurrences]
        if count is not None:
            self._test_case.assertEqual(count, len(prefixes), prefixes)
        return prefixes

    def FormatGroup(self, group):
        return "%s\n  %s" % (group, "\n  ".join(group.FormatOccurrences()))

    def AssertNoMoreRuleGroups(self):
        """Check that no unexpected rule groups were returned."""
        groups_as_text = [self.FormatGroup(g) for g in self.groups]
        self.groups = []
        self._test_case.assertFalse(groups_as_text, "\n".join(groups_as_text))

    def TearDownAssertNoMoreRuleGroups(self):
        assert (
            len(self.groups) == 0
        ), "see util.RuleGroupRecorder.AssertNoMoreRuleGroups"


class ValidationTestCase(TestCase):
    def setUp(self):
        self.recorder = RuleGroupRecorder(self)
        self.validator = gtfsrtvalidator.StopTimeUpdateValidator()
        self.schedule_index = MakeScheduleIndex({})

    def tearDown(self):
        self.recorder.TearDownAssertNoMoreRuleGroups()

    def Validate(self, *trip_updates):
        groups = self.validator.Validate(
            1500000000, self.schedule_index, Feed(*trip_updates)
        )
        self.recorder.Record(groups)
        return groups

    def ExpectNoProblems(self, *trip_updates):
        self.Validate(*trip_updates)
        self.recorder.AssertNoMoreRuleGroups()


class RecordingProblemAccumulator(gtfsrtvalidator.ProblemAccumulatorInterface):
    """Save all problems for later inspection.

    Args:
      test_case: a unittest.TestCase object on which to report problems
      ignore_types: sequence of string type names that will be ignored by the
      ProblemAccumulator"""

    def __init__(self, test_case, ignore_types=None):
        self.exceptions = []
        self._test_case = test_case
        self._ignore_types = ignore_types or set()

    def _Report(self, e):
        # Ensure that these don't crash
        e.FormatProblem()
        e.FormatContext()
        if e.__class__.__name__ in self._ignore_types:
            return
        # Keep the 7 nearest stack frames. This should be enough to identify
        # the code path that created the exception while trimming off most of the
        # large test framework's stack.
        traceback_list = traceback.format_list(
            traceback.extract_stack()[-7:-1]
        )
        self.exceptions.append((e, "".join(traceback_list)))

    def PopException(self, type_name):
        """Return the first exception, which must be a type_name."""
        e = self.exceptions.pop(0)
        e_name = e[0].__class__.__name__
        self._test_case.assertEqual(
            e_name,
            type_name,
            "%s != %s\n%s" % (e_name, type_name, self.FormatException(*e)),
        )
        return e[0]

    def FormatException(self, exce, tb):
        return "%s\nwith gtfs file context %s\nand traceback\n%s" % (
            exce.FormatProblem(),
            exce.FormatContext(),
            tb,
        )

    def AssertNoMoreExceptions(self):
        exceptions_as_text = []
        for e, tb in self.exceptions:
            exceptions_as_text.append(self.FormatException(e, tb))
        self.exceptions = []
        self._test_case.assertFalse(
            exceptions_as_text, "\n".join(exceptions_as_text)
        )

    def PopInvalidValue(self, column_name, file_name=None):
        e = self.PopException("InvalidValue")
        self._test_case.assertEqual(column_name, e.column_name)
        if file_name:
            self._test_case.assertEqual(file_name, e.file_name)
        return e
