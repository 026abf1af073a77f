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

"""Reporting of problems found while reading the validator's inputs.

Problems with the files handed to the validator (a GTFS schedule that can't
be found, a feed that isn't a protocol buffer, a bad stop_sequence column)
are reported through a ProblemReporter. Rule violations found inside a
readable feed are not problems in this sense; they are recorded as
occurrences, see occurrences.py.
"""

import logging
from functools import reduce

from .errors import TYPE_ERROR, TYPE_WARNING, ALL_TYPES, Error


class ProblemReporter(object):
    """Base class for problem reporters. Tracks the current context and creates
     an exception object for each problem. Exception objects are sent to a
     Problem Accumulator, which is responsible for handling them."""

    def __init__(self, accumulator=None):
        self.ClearContext()
        if accumulator is None:
            self.accumulator = SimpleProblemAccumulator()
        else:
            self.accumulator = accumulator

    def ClearContext(self):
        """Clear any previous context."""
        self._context = None

    def SetFileContext(self, file_name, row_num, row, headers):
        """Save the current context to be output with any errors.

    Args:
      file_name: string
      row_num: int
      row: list of strings
      headers: list of column headers, its order corresponding to row's
    """
        self._context = (file_name, row_num, row, headers)

    def GetFileContext(self):
        return self._context

    def AddToAccumulator(self, e):
        """Report an exception to the Problem Accumulator"""
        self.accumulator._Report(e)

    def FeedNotFound(self, feed_name, context=None, type=TYPE_ERROR):
        e = FeedNotFound(
            feed_name=feed_name,
            context=context,
            context2=self._context,
            type=type,
        )
        self.AddToAccumulator(e)

    def UnknownFormat(self, feed_name, context=None, type=TYPE_ERROR):
        e = UnknownFormat(
            feed_name=feed_name,
            context=context,
            context2=self._context,
            type=type,
        )
        self.AddToAccumulator(e)

    def MissingFile(self, file_name, context=None, type=TYPE_ERROR):
        e = MissingFile(
            file_name=file_name,
            context=context,
            context2=self._context,
            type=type,
        )
        self.AddToAccumulator(e)

    def EmptyFile(self, file_name, context=None, type=TYPE_ERROR):
        e = EmptyFile(
            file_name=file_name,
            context=context,
            context2=self._context,
            type=type,
        )
        self.AddToAccumulator(e)

    def MissingColumn(
        self, file_name, column_name, context=None, type=TYPE_ERROR
    ):
        e = MissingColumn(
            file_name=file_name,
            column_name=column_name,
            context=context,
            context2=self._context,
            type=type,
        )
        self.AddToAccumulator(e)

    def InvalidValue(
        self, column_name, value, reason=None, context=None, type=TYPE_ERROR
    ):
        e = InvalidValue(
            column_name=column_name,
            value=value,
            reason=reason,
            context=context,
            context2=self._context,
            type=type,
        )
        self.AddToAccumulator(e)

    def OtherProblem(self, description, context=None, type=TYPE_ERROR):
        e = OtherProblem(
            description=description,
            context=context,
            context2=self._context,
            type=type,
        )
        self.AddToAccumulator(e)


class ProblemAccumulatorInterface(object):
    """The base class for Problem Accumulators, which defines their interface."""

    def _Report(self, e):
        raise NotImplementedError(
            "Please use a concrete Problem Accumulator that "
            "implements error and warning handling."
        )


class SimpleProblemAccumulator(ProblemAccumulatorInterface):
    """This is a basic problem accumulator that just prints to console."""

    def _Report(self, e):
        context = e.FormatContext()
        if context:
            print(context)
        print(self._LineWrap(e.FormatProblem(), 78))

    @staticmethod
    def _LineWrap(text, width):
        """
    A word-wrap function that preserves existing line breaks
    and most spaces in the text. Expects that existing line
    breaks are posix newlines (\n).

    Taken from:
    http://aspn.activestate.com/ASPN/Cookbook/Python/Recipe/148061
    """
        return reduce(
            lambda line, word, width=width: "%s%s%s"
            % (
                line,
                " \n"[
                    (
                        len(line)
                        - line.rfind("\n")
                        - 1
                        + len(word.split("\n", 1)[0])
                        >= width
                    )
                ],
                word,
            ),
            text.split(" "),
        )


class ExceptionWithContext(Error):
    def __init__(self, context=None, context2=None, **kwargs):
        """Initialize an exception object, saving all keyword arguments in self.
    context and context2, if present, must be a tuple of (file_name, row_num,
    row, headers). context2 comes from ProblemReporter.SetFileContext. context
    was passed in with the keyword arguments. context2 is ignored if context
    is present."""
        Error.__init__(self)

        if context:
            self.__dict__.update(self.ContextTupleToDict(context))
        elif context2:
            self.__dict__.update(self.ContextTupleToDict(context2))
        self.__dict__.update(kwargs)

        if ("type" in kwargs) and (kwargs["type"] in ALL_TYPES):
            self._type = kwargs["type"]
        else:
            self._type = TYPE_ERROR

    def GetType(self):
        return self._type

    def IsError(self):
        return self._type == TYPE_ERROR

    def IsWarning(self):
        return self._type == TYPE_WARNING

    CONTEXT_PARTS = ["file_name", "row_num", "row", "headers"]

    @staticmethod
    def ContextTupleToDict(context):
        """Convert a tuple representing a context into a dict of (key, value) pairs
    """
        d = {}
        if not context:
            return d
        for k, v in zip(ExceptionWithContext.CONTEXT_PARTS, context):
            if v != "" and v is not None:  # Don't ignore int(0), a valid row_num
                d[k] = v
        return d

    def __str__(self):
        return self.FormatProblem()

    def GetDictToFormat(self):
        """Return a copy of self as a dict, suitable for passing to FormatProblem"""
        return dict(self.__dict__)

    def FormatProblem(self, d=None):
        """Return a text string describing the problem.

    Args:
      d: map returned by GetDictToFormat with  with formatting added
    """
        if not d:
            d = self.GetDictToFormat()

        output_error_text = self.__class__.ERROR_TEXT % d
        if ("reason" in d) and d["reason"]:
            return "%s\n%s" % (output_error_text, d["reason"])
        else:
            return output_error_text

    def FormatContext(self):
        """Return a text string describing the context"""
        text = ""
        if hasattr(self, "feed_name"):
            text += "In feed '%s': " % self.feed_name
        if hasattr(self, "file_name"):
            text += self.file_name
        if hasattr(self, "row_num"):
            text += ":%i" % self.row_num
        if hasattr(self, "column_name"):
            text += " column %s" % self.column_name
        return text


class FeedNotFound(ExceptionWithContext):
    ERROR_TEXT = "Couldn't find a feed named %(feed_name)s"


class UnknownFormat(ExceptionWithContext):
    ERROR_TEXT = (
        "The feed named %(feed_name)s had an unknown format:\n"
        "GTFS schedules should be either .zip files or directories and "
        "GTFS-realtime feeds should be binary protocol buffer files."
    )


class MissingFile(ExceptionWithContext):
    ERROR_TEXT = "File %(file_name)s is not found"


class EmptyFile(ExceptionWithContext):
    ERROR_TEXT = "File %(file_name)s is empty"


class MissingColumn(ExceptionWithContext):
    ERROR_TEXT = "Missing column %(column_name)s in file %(file_name)s"


class InvalidValue(ExceptionWithContext):
    ERROR_TEXT = 'Invalid value %(value)s in field %(column_name)s'


class OtherProblem(ExceptionWithContext):
    ERROR_TEXT = "%(description)s"


class ExceptionProblemAccumulator(ProblemAccumulatorInterface):
    """A problem accumulator that handles errors and optionally warnings by
     raising exceptions."""

    def __init__(self, raise_warnings=False):
        """Initialise.

    Args:
      raise_warnings: If this is True then warnings are also raised as
                      exceptions.
                      If it is false, warnings are printed to the console using
                      SimpleProblemAccumulator.
    """
        self.raise_warnings = raise_warnings
        self.accumulator = SimpleProblemAccumulator()

    def _Report(self, e):
        if self.raise_warnings or e.IsError():
            raise e
        else:
            self.accumulator._Report(e)


default_accumulator = ExceptionProblemAccumulator()
default_problem_reporter = ProblemReporter(default_accumulator)

# Add a default handler to send log messages to console
console = logging.StreamHandler()
console.setLevel(logging.WARNING)
log = logging.getLogger("gtfsrtvalidator")
log.addHandler(console)
