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

# Smoke tests of rtfeedvalidator. Make sure it runs and returns the right
# things for a valid feed, a feed with errors and files it can't read.


import logging
import os
import sys
from io import StringIO

from google.transit import gtfs_realtime_pb2

import gtfsrtvalidator
import rtfeedvalidator
from gtfsrtvalidator import problems
from tests import util


def WriteTripUpdates(path, trips):
    """Write a FeedMessage with one entity for each (trip_id, stops) pair,
    stops being a list of (stop_sequence, stop_id) tuples."""
    message = gtfs_realtime_pb2.FeedMessage()
    message.header.gtfs_realtime_version = "2.0"
    message.header.timestamp = 1500000000
    for entity_id, (trip_id, stops) in enumerate(trips):
        entity = message.entity.add()
        entity.id = str(entity_id)
        entity.trip_update.trip.trip_id = trip_id
        for stop_sequence, stop_id in stops:
            stu = entity.trip_update.stop_time_update.add()
            stu.stop_sequence = stop_sequence
            stu.stop_id = stop_id
            stu.arrival.delay = 60
    with open(path, "wb") as f:
        f.write(message.SerializeToString())
    return path


class RtFeedValidatorTestCaseBase(util.TempDirTestCaseBase):
    def setUp(self):
        util.TempDirTestCaseBase.setUp(self)
        self.saved_stdout = sys.stdout
        self.this_stdout = StringIO()
        sys.stdout = self.this_stdout
        self.schedule_path = self.WriteZip(
            "schedule.zip", {"stop_times.txt": util.STOP_TIMES}
        )

    def tearDown(self):
        sys.stdout = self.saved_stdout
        self.this_stdout.close()
        util.TempDirTestCaseBase.tearDown(self)

    def Run(self, *args):
        schedule_path, feed_path, options = (
            rtfeedvalidator.ParseCommandLineArguments(list(args))
        )
        return rtfeedvalidator.RunValidationFromOptions(
            schedule_path, feed_path, options
        )


class GoodFeedTestCase(RtFeedValidatorTestCaseBase):
    def runTest(self):
        feed_path = WriteTripUpdates(
            "good.pb",
            [
                ("AB1", [(1, "BEATTY_AIRPORT"), (2, "BULLFROG")]),
                ("CITY1", [(5, "NANAA"), (10, "NADAV")]),
            ],
        )
        self.assertEqual(0, self.Run(self.schedule_path, feed_path))
        out = self.this_stdout.getvalue()
        self.assertMatchesRegex(r"feed validated successfully", out)
        self.assertFalse("ERROR" in out)
        self.assertFalse(os.path.exists("gtfsrtvalidatorcrash.txt"))


class BadFeedTestCase(RtFeedValidatorTestCaseBase):
    def setUp(self):
        RtFeedValidatorTestCaseBase.setUp(self)
        trips = [("AB1", [(2, "STAGECOACH")])]
        trips.extend([("empty%d" % i, []) for i in range(7)])
        self.feed_path = WriteTripUpdates("bad.pb", trips)

    def testRuleGroupsArePrinted(self):
        self.assertEqual(1, self.Run(self.schedule_path, self.feed_path))
        out = self.this_stdout.getvalue()
        self.assertMatchesRegex(
            r"E041: trip doesn't have any stop_time_updates \(7 occurrences\)",
            out,
        )
        self.assertMatchesRegex(
            r"  trip_id empty0 has no stop_time_updates and is not CANCELED",
            out,
        )
        self.assertMatchesRegex(r"trip_id empty4 has no", out)
        self.assertFalse("trip_id empty5" in out)
        self.assertMatchesRegex(r"\.\.\. and 2 more occurrences not shown", out)
        self.assertMatchesRegex(r"E045: .* \(1 occurrence\)", out)
        self.assertMatchesRegex(r"ERROR: 8 errors found", out)

    def testLimitPerType(self):
        self.assertEqual(
            1, self.Run("--limit_per_type=7", self.schedule_path, self.feed_path)
        )
        out = self.this_stdout.getvalue()
        self.assertMatchesRegex(r"trip_id empty6 has no", out)
        self.assertFalse("not shown" in out)

    def testIgnoreList(self):
        self.assertEqual(
            1,
            self.Run(
                "--error_types_ignore_list=E041,E999",
                self.schedule_path,
                self.feed_path,
            ),
        )
        out = self.this_stdout.getvalue()
        self.assertFalse("E041" in out)
        self.assertMatchesRegex(
            r"trip_id AB1 stop_sequence 2 has stop_id STAGECOACH but GTFS "
            r"stop_sequence 2\s+has stop_id BULLFROG",
            out,
        )
        self.assertMatchesRegex(r"ERROR: 1 error found", out)

    def testIgnoreEverything(self):
        self.assertEqual(
            0,
            self.Run(
                "--error_types_ignore_list=E041,E045",
                self.schedule_path,
                self.feed_path,
            ),
        )
        self.assertMatchesRegex(
            r"feed validated successfully", self.this_stdout.getvalue()
        )


class UnreadableInputTestCase(RtFeedValidatorTestCaseBase):
    def testMissingFeed(self):
        self.assertEqual(2, self.Run(self.schedule_path, "missing.pb"))
        self.assertMatchesRegex(
            r"ERROR: Couldn't find a feed named missing.pb",
            self.this_stdout.getvalue(),
        )

    def testMissingSchedule(self):
        feed_path = WriteTripUpdates("good.pb", [])
        self.assertEqual(2, self.Run("missing.zip", feed_path))
        self.assertMatchesRegex(
            r"ERROR: Couldn't find a feed named missing.zip",
            self.this_stdout.getvalue(),
        )

    def testScheduleWithoutStopTimes(self):
        schedule_path = self.WriteZip("other.zip", {"stops.txt": "stop_id\n"})
        feed_path = WriteTripUpdates("good.pb", [])
        self.assertEqual(2, self.Run(schedule_path, feed_path))
        self.assertMatchesRegex(
            r"ERROR: File stop_times.txt is not found",
            self.this_stdout.getvalue(),
        )

    def testUndecodableFeed(self):
        feed_path = self.WriteFile("bad.pb", b"\x0a\xff", "wb")
        self.assertEqual(2, self.Run(self.schedule_path, feed_path))
        self.assertMatchesRegex(
            r"ERROR: The feed named .*bad.pb had an unknown format",
            self.this_stdout.getvalue(),
        )


class VerboseTestCase(RtFeedValidatorTestCaseBase):
    def setUp(self):
        RtFeedValidatorTestCaseBase.setUp(self)
        self.saved_levels = (problems.log.level, problems.console.level)

    def tearDown(self):
        problems.log.setLevel(self.saved_levels[0])
        problems.console.setLevel(self.saved_levels[1])
        RtFeedValidatorTestCaseBase.tearDown(self)

    def runTest(self):
        feed_path = WriteTripUpdates("bad.pb", [("AB1", [(2, "STAGECOACH")])])
        self.assertEqual(1, self.Run("-v", self.schedule_path, feed_path))
        self.assertEqual(logging.DEBUG, problems.log.level)
        self.assertEqual(logging.DEBUG, problems.console.level)


class CommandLineArgumentsTestCase(util.TestCase):
    def testDefaults(self):
        schedule_path, feed_path, options = (
            rtfeedvalidator.ParseCommandLineArguments(["a.zip", '"b.pb"'])
        )
        self.assertEqual("a.zip", schedule_path)
        self.assertEqual("b.pb", feed_path)
        self.assertEqual(5, options.limit_per_type)
        self.assertEqual(None, options.error_types_ignore_list)
        self.assertFalse(options.verbose)

    def testIgnoreList(self):
        options = rtfeedvalidator.ParseCommandLineArguments(
            ["--error_types_ignore_list=E036,E037", "a.zip", "b.pb"]
        )[2]
        self.assertEqual(["E036", "E037"], options.error_types_ignore_list)


class ConsoleRuleGroupReporterTestCase(util.TestCase):
    def runTest(self):
        output = StringIO()
        reporter = rtfeedvalidator.ConsoleRuleGroupReporter(
            limit_per_type=1, output=output
        )
        groups = gtfsrtvalidator.ValidateFeed(
            util.Feed(util.Trip("t1"), util.Trip("t2")),
            util.MakeScheduleIndex({}),
        )
        reporter.ReportRuleGroups(groups)
        self.assertEqual(2, reporter.ErrorCount())
        self.assertEqual(0, reporter.WarningCount())
        self.assertEqual("2 errors", reporter.FormatCount())
        self.assertEqual(
            "E041: trip doesn't have any stop_time_updates (2 occurrences)\n"
            "  trip_id t1 has no stop_time_updates and is not CANCELED\n"
            "  ... and 1 more occurrence not shown\n",
            output.getvalue(),
        )
