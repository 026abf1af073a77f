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

import bisect
import codecs
import csv
import io
import os
import zipfile

from . import problems as problems_module
from . import util
from .errors import Error
from .feed import StaticStopEntry


class StaticScheduleIndex(object):
    """The stop_times of a static GTFS schedule, by trip_id.

  Each trip maps to its StaticStopEntry objects sorted by stop_sequence.
  """

    def __init__(self):
        self._trips = {}

    def AddStopEntry(self, trip_id, stop_sequence, stop_id):
        entries = self._trips.setdefault(trip_id, [])
        entry = StaticStopEntry(stop_sequence, stop_id)
        # stop_times.txt is usually sorted, so this is normally an append
        if entries and entries[-1].stop_sequence > stop_sequence:
            sequences = [e.stop_sequence for e in entries]
            position = bisect.bisect_right(sequences, stop_sequence)
            entries.insert(position, entry)
        else:
            entries.append(entry)
        return entry

    def GetStopEntries(self, trip_id):
        """Return the sorted StaticStopEntry list of trip_id or None if the
    schedule doesn't have the trip."""
        entries = self._trips.get(trip_id)
        if entries is None:
            return None
        return tuple(entries)

    def GetTripIds(self):
        return sorted(self._trips.keys())

    def __contains__(self, trip_id):
        return trip_id in self._trips

    def __len__(self):
        return len(self._trips)


class StaticScheduleLoader(object):
    """Builds a StaticScheduleIndex from the stop_times.txt of a GTFS feed."""

    _FILE_NAME = "stop_times.txt"
    _REQUIRED_COLUMNS = ["trip_id", "stop_id", "stop_sequence"]

    def __init__(
        self,
        feed_path=None,
        problems=problems_module.default_problem_reporter,
        zip=None,
    ):
        """Initialize a new StaticScheduleLoader object.

    Args:
      feed_path: string path to a zip file or directory
      problems: a ProblemReporter object, the default reporter raises an
        exception for each problem
      zip: a zipfile.ZipFile object, optionally used instead of path
    """
        self._path = feed_path
        self._problems = problems
        self._zip = zip

    def _DetermineFormat(self):
        """Determines whether the feed is in a form that we understand, and
       if so, returns True."""
        if self._zip:
            # If zip was passed to __init__ then path isn't used
            assert not self._path
            return True

        if not isinstance(self._path, str) and hasattr(self._path, "read"):
            # A file-like object, used for testing with a BytesIO file
            self._zip = zipfile.ZipFile(self._path, mode="r")
            return True

        if not os.path.exists(self._path):
            self._problems.FeedNotFound(self._path)
            return False

        if self._path.endswith(".zip"):
            try:
                self._zip = zipfile.ZipFile(self._path, mode="r")
            except IOError:  # self._path is a directory
                pass
            except zipfile.BadZipfile:
                self._problems.UnknownFormat(self._path)
                return False

        if not self._zip and not os.path.isdir(self._path):
            self._problems.UnknownFormat(self._path)
            return False

        return True

    def _FileContents(self, file_name):
        results = None
        if self._zip:
            try:
                results = self._zip.read(file_name)
            except KeyError:  # file not found in archive
                self._problems.MissingFile(file_name)
                return None
        else:
            try:
                with open(os.path.join(self._path, file_name), "rb") as f:
                    results = f.read()
            except IOError:  # file not found
                self._problems.MissingFile(file_name)
                return None

        if not results:
            self._problems.EmptyFile(file_name)
        return results

    def _ReadStopTimes(self):
        """Yield (row_num, header, row dict) for each row of stop_times.txt."""
        contents = self._FileContents(self._FILE_NAME)
        if not contents:
            return
        # strip out any UTF-8 Byte Order Marker (otherwise it'll be
        # treated as part of the first column name, causing a mis-parse)
        contents = contents.lstrip(codecs.BOM_UTF8)
        text = contents.decode("utf-8", "replace")
        reader = csv.DictReader(io.StringIO(text))
        header = [name.strip() for name in (reader.fieldnames or [])]
        reader.fieldnames = header

        missing = [c for c in self._REQUIRED_COLUMNS if c not in header]
        for column_name in missing:
            self._problems.MissingColumn(self._FILE_NAME, column_name)
        if missing:
            return

        # Row 1 is the header
        for row_num, row in enumerate(reader, 2):
            yield row_num, header, row

    def _ReportUnicodeErrors(self, header, row):
        """Report each value of row holding bytes that weren't valid utf-8.

    Returns:
      True if any value was reported.
    """
        found = False
        for column_name in header:
            value = row.get(column_name)
            # Invalid bytes were decoded as U+FFFD by _ReadStopTimes
            if value and "\ufffd" in value:
                self._problems.InvalidValue(column_name, value, "Unicode error")
                found = True
        return found

    def Load(self):
        """Return a StaticScheduleIndex with the stop_times of the feed."""
        index = StaticScheduleIndex()
        self._problems.ClearContext()
        if not self._DetermineFormat():
            return index

        for row_num, header, row in self._ReadStopTimes():
            self._problems.SetFileContext(
                self._FILE_NAME,
                row_num,
                [row.get(h) for h in header],
                header,
            )
            if self._ReportUnicodeErrors(header, row):
                continue
            trip_id = (row.get("trip_id") or "").strip()
            stop_id = (row.get("stop_id") or "").strip()
            try:
                sequence = util.StopSequenceToInt(row.get("stop_sequence"))
            except Error as e:
                self._problems.InvalidValue(
                    "stop_sequence", row.get("stop_sequence"), str(e)
                )
                continue
            if util.IsEmpty(trip_id):
                self._problems.InvalidValue("trip_id", trip_id)
                continue
            index.AddStopEntry(trip_id, sequence, stop_id)
        self._problems.ClearContext()

        if self._zip:
            self._zip.close()
            self._zip = None

        return index


def LoadStaticScheduleIndex(
    feed_path, problems=problems_module.default_problem_reporter
):
    return StaticScheduleLoader(feed_path, problems=problems).Load()
