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


"""Validates the trip updates of a GTFS-realtime feed against a GTFS file.

For usage information run rtfeedvalidator.py --help
"""

import logging
import sys
import time

import gtfsrtvalidator
from gtfsrtvalidator import problems
from gtfsrtvalidator import util


def MaybePluralizeWord(count, word):
    if count == 1:
        return word
    else:
        return word + "s"


def PrettyNumberWord(count, word):
    return "%d %s" % (count, MaybePluralizeWord(count, word))


def ProblemCountText(error_count, warning_count):
    results = []
    if error_count:
        results.append(PrettyNumberWord(error_count, "error"))
    if warning_count:
        results.append(PrettyNumberWord(warning_count, "warning"))

    return " and ".join(results)


class ConsoleRuleGroupReporter(object):
    """Print rule groups to the console and count errors and warnings.

    Args:
      limit_per_type: maximum number of occurrences printed for each rule
      ignore_types: list of rule ids that will be ignored. E.g.
                    ['E036', 'E037']
      output: file object to print to, sys.stdout by default
    """

    def __init__(self, limit_per_type=5, ignore_types=None, output=None):
        self._limit_per_type = limit_per_type
        self._ignore_types = set(ignore_types or [])
        self._output = output or sys.stdout
        self._error_count = 0
        self._warning_count = 0

    def ReportRuleGroups(self, rule_groups):
        for group in rule_groups:
            if group.GetRuleId() in self._ignore_types:
                continue
            self.ReportRuleGroup(group)

    def ReportRuleGroup(self, group):
        if group.IsError():
            self._error_count += len(group)
        elif group.IsWarning():
            self._warning_count += len(group)

        self._Print(
            "%s: %s (%s)"
            % (
                group.GetRuleId(),
                group.rule.title,
                PrettyNumberWord(len(group), "occurrence"),
            )
        )
        formatted = group.FormatOccurrences()
        for text in formatted[: self._limit_per_type]:
            self._Print(
                "  "
                + problems.SimpleProblemAccumulator._LineWrap(text, 76).replace(
                    "\n", "\n  "
                )
            )
        dropped = len(formatted) - self._limit_per_type
        if dropped > 0:
            self._Print(
                "  ... and %s not shown"
                % PrettyNumberWord(dropped, "more occurrence")
            )

    def _Print(self, text):
        print(text, file=self._output)

    def ErrorCount(self):
        return self._error_count

    def WarningCount(self):
        return self._warning_count

    def FormatCount(self):
        return ProblemCountText(self.ErrorCount(), self.WarningCount())

    def HasIssues(self):
        return self.ErrorCount() or self.WarningCount()


def RunValidation(schedule_path, feed_path, options, reporter=None):
    """Validate the feed at feed_path and print the results.

    Args:
      schedule_path: path of a GTFS zip file or directory
      feed_path: path of a binary GTFS-realtime trip updates file
      options: options object returned by ParseCommandLineArguments
      reporter: a ConsoleRuleGroupReporter, created from options if None

    Returns:
      The exit code, 1 if the feed has any issue and 0 otherwise.
    """
    if reporter is None:
        reporter = ConsoleRuleGroupReporter(
            limit_per_type=options.limit_per_type,
            ignore_types=options.error_types_ignore_list,
        )
    problem_reporter = gtfsrtvalidator.default_problem_reporter

    print("loading GTFS schedule %s" % schedule_path)
    schedule_index = gtfsrtvalidator.LoadStaticScheduleIndex(
        schedule_path, problems=problem_reporter
    )
    print("validating %s" % feed_path)
    feed = gtfsrtvalidator.LoadFeedSnapshot(feed_path, problems=problem_reporter)

    rule_groups = gtfsrtvalidator.StopTimeUpdateValidator().Validate(
        int(time.time()), schedule_index, feed
    )
    reporter.ReportRuleGroups(rule_groups)

    if reporter.HasIssues():
        print("ERROR: %s found" % reporter.FormatCount())
        return 1
    else:
        print("feed validated successfully")
        return 0


def RunValidationFromOptions(schedule_path, feed_path, options):
    """Validate the feed and return an exit code.

    Problems reading either input are printed and give exit code 2.
    """
    if options.verbose:
        problems.log.setLevel(logging.DEBUG)
        problems.console.setLevel(logging.DEBUG)
    try:
        return RunValidation(schedule_path, feed_path, options)
    except gtfsrtvalidator.ExceptionWithContext as e:
        context = e.FormatContext()
        if context:
            print(context)
        print("ERROR: %s" % e.FormatProblem())
        return 2


def main():
    (schedule_path, feed_path, options) = ParseCommandLineArguments()
    return RunValidationFromOptions(schedule_path, feed_path, options)


def ParseCommandLineArguments(args=None):
    usage = """%prog [options] <input GTFS.zip> <trip updates .pb>

        Validates the stop_time_updates of the GTFS-realtime trip updates file
        <trip updates .pb> against the schedule in GTFS file (or directory)
        <input GTFS.zip> and prints the violated rules to the console.
        """

    parser = util.OptionParserLongError(
        usage=usage, version="%prog " + gtfsrtvalidator.__version__
    )
    parser.add_option(
        "-l",
        "--limit_per_type",
        dest="limit_per_type",
        action="store",
        type="int",
        help="Maximum number of occurrences to print for each rule",
    )
    parser.add_option(
        "--error_types_ignore_list",
        dest="error_types_ignore_list",
        help="a comma-separated list of rule ids to be ignored during "
        'validation (e.g. "E036,E037"). Bad rule ids will be silently '
        "ignored!",
    )
    parser.add_option(
        "-v",
        "--verbose",
        dest="verbose",
        action="store_true",
        help="log every occurrence as it is found",
    )

    parser.set_defaults(
        limit_per_type=5, error_types_ignore_list="", verbose=False
    )
    (options, args) = parser.parse_args(args)

    if not len(args) == 2:
        parser.error(
            "You must provide the path of a GTFS feed and of a GTFS-realtime "
            "feed"
        )
    schedule_path, feed_path = [arg.strip('"') for arg in args]

    # transform options.error_types_ignore_list into a valid list
    if options.error_types_ignore_list:
        options.error_types_ignore_list = options.error_types_ignore_list.split(
            ","
        )
    else:
        options.error_types_ignore_list = None

    return (schedule_path, feed_path, options)


if __name__ == "__main__":
    util.RunWithCrashHandler(main)
