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

"""Checks the stop_time_updates of every trip in a GTFS-realtime feed.

  E002 - stop_time_updates for a given trip_id must be sorted by increasing
         stop_sequence
  E036 - Sequential stop_time_updates have the same stop_sequence
  E037 - Sequential stop_time_updates have the same stop_id
  E040 - stop_time_update doesn't contain stop_id or stop_sequence
  E041 - trip doesn't have any stop_time_updates
  E042 - arrival or departure provided for NO_DATA stop_time_update
  E043 - stop_time_update doesn't have arrival or departure
  E044 - stop_time_update arrival/departure doesn't have delay or time
  E045 - GTFS-rt stop_time_update stop_sequence and stop_id do not match GTFS

Each Check* function looks at a single update, or at an update and the one
before it, records any occurrence it finds and returns True if it found one.
"""

from collections import namedtuple

from . import feed as feed_module
from . import rules
from .occurrences import OccurrenceRecorder
from .problems import log

# stop_sequence and stop_id of the previous stop_time_update of a trip. None
# when the previous update lacks the field or there is no previous update.
AdjacencyState = namedtuple("AdjacencyState", ["stop_sequence", "stop_id"])
NO_PREVIOUS_STOP = AdjacencyState(None, None)


def CheckE036(recorder, trip_update, previous_stop_sequence, stop_time_update):
    if previous_stop_sequence is None:
        return False
    if not stop_time_update.HasStopSequence():
        return False
    if previous_stop_sequence != stop_time_update.stop_sequence:
        return False
    recorder.Record(
        rules.E036,
        "%s has repeating stop_sequence %d"
        % (trip_update.GetTripLabel(), previous_stop_sequence),
    )
    return True


def CheckE037(recorder, trip_update, previous_stop_id, stop_time_update):
    if not previous_stop_id or not stop_time_update.HasStopId():
        return False
    if previous_stop_id != stop_time_update.stop_id:
        return False
    prefix = "%s has repeating stop_id %s" % (
        trip_update.GetTripLabel(),
        previous_stop_id,
    )
    if stop_time_update.HasStopSequence():
        prefix += " at stop_sequence %d" % stop_time_update.stop_sequence
    recorder.Record(rules.E037, prefix)
    return True


def CheckAdjacentStops(recorder, trip_update, state, stop_time_update):
    """Run the checks comparing stop_time_update with the update before it.

  Args:
    recorder: OccurrenceRecorder
    trip_update: the TripUpdate containing stop_time_update
    state: AdjacencyState of the previous update, NO_PREVIOUS_STOP for the
           first update of a trip
    stop_time_update: the StopTimeUpdate to check

  Returns:
    The AdjacencyState to pass in with the next update of the trip. It holds
    the raw values of stop_time_update, whether or not it violated a rule.
  """
    CheckE036(recorder, trip_update, state.stop_sequence, stop_time_update)
    CheckE037(recorder, trip_update, state.stop_id, stop_time_update)
    return AdjacencyState(
        stop_time_update.stop_sequence, stop_time_update.stop_id
    )


def CheckE040(recorder, trip_update, stop_time_update):
    if stop_time_update.HasStopSequence() or stop_time_update.HasStopId():
        return False
    recorder.Record(rules.E040, trip_update.GetTripLabel())
    return True


def CheckE041(recorder, trip_update):
    if trip_update.stop_time_updates:
        return False
    if trip_update.IsCanceled():
        # A canceled trip doesn't need any stop_time_updates
        return False
    recorder.Record(rules.E041, trip_update.GetTripLabel())
    return True


def _GetUpdateLabel(trip_update, stop_time_update):
    return "%s %s" % (
        trip_update.GetTripLabel(),
        stop_time_update.GetStopLabel(),
    )


def CheckE042(recorder, trip_update, stop_time_update):
    if stop_time_update.schedule_relationship != feed_module.NO_DATA:
        return False
    label = _GetUpdateLabel(trip_update, stop_time_update)
    found = False
    if stop_time_update.HasArrival():
        recorder.Record(rules.E042, label + " has arrival")
        found = True
    if stop_time_update.HasDeparture():
        recorder.Record(rules.E042, label + " has departure")
        found = True
    return found


def CheckE043(recorder, trip_update, stop_time_update):
    if stop_time_update.HasArrival() or stop_time_update.HasDeparture():
        return False
    if stop_time_update.schedule_relationship in (
        feed_module.SKIPPED,
        feed_module.NO_DATA,
    ):
        # SKIPPED and NO_DATA updates don't need an arrival or departure
        return False
    recorder.Record(
        rules.E043, _GetUpdateLabel(trip_update, stop_time_update)
    )
    return True


def CheckE044(recorder, trip_update, stop_time_update):
    label = _GetUpdateLabel(trip_update, stop_time_update)
    found = False
    for name, event in (
        ("arrival", stop_time_update.arrival),
        ("departure", stop_time_update.departure),
    ):
        if event is not None and not event.HasDelayOrTime():
            recorder.Record(rules.E044, "%s %s" % (label, name))
            found = True
    return found


def CheckE045(recorder, trip_update, stop_time_update, static_entry):
    """Compare stop_time_update with the static_entry the aligner paired it
  with."""
    if static_entry.stop_id == stop_time_update.stop_id:
        return False
    recorder.Record(
        rules.E045,
        "%s stop_sequence %d has stop_id %s but GTFS stop_sequence %d has "
        "stop_id %s"
        % (
            trip_update.GetTripLabel(),
            stop_time_update.stop_sequence,
            stop_time_update.stop_id,
            static_entry.stop_sequence,
            static_entry.stop_id,
        ),
    )
    return True


def CheckE002(recorder, trip_update, stop_sequences):
    """Check once per trip that the provided stop_sequence values never
  decrease. Equal neighbours are reported by E036."""
    for previous, current in zip(stop_sequences, stop_sequences[1:]):
        if current < previous:
            recorder.Record(
                rules.E002,
                "%s stop_sequence %s"
                % (trip_update.GetTripLabel(), list(stop_sequences)),
            )
            return True
    return False


class ScheduleAligner(object):
    """Walks the static stop_times of one trip in step with its realtime
  stop_time_updates.

  The cursor only moves forward. A static entry is consumed when it is paired
  with an update, and once the cursor reaches the end of the static list no
  later update of the trip is paired. This assumes the realtime updates
  follow the static stop_sequence order; updates that go back to an earlier
  static row are not matched.
  """

    def __init__(self, static_entries):
        self._entries = static_entries
        self._index = 0

    def IsExhausted(self):
        return self._index >= len(self._entries)

    def Align(self, stop_time_update):
        """Return the StaticStopEntry with the stop_sequence of
    stop_time_update, or None if the rest of the static list has none.

    Updates without both stop_sequence and stop_id are not aligned and leave
    the cursor where it is.
    """
        if not (
            stop_time_update.HasStopSequence() and stop_time_update.HasStopId()
        ):
            return None
        while self._index < len(self._entries):
            entry = self._entries[self._index]
            self._index += 1
            if entry.stop_sequence == stop_time_update.stop_sequence:
                return entry
        return None


class FeedEntityValidator(object):
    """Interface of the validators run against each GTFS-realtime feed."""

    def Validate(self, current_time, schedule_index, feed, previous_feed=None):
        """Validate feed.

    Args:
      current_time: POSIX time the feed is validated at
      schedule_index: a StaticScheduleIndex or any mapping from trip_id to a
                      list of StaticStopEntry sorted by stop_sequence
      feed: the FeedSnapshot to validate
      previous_feed: the FeedSnapshot validated before feed, or None

    Returns:
      A list of RuleGroup objects.
    """
        raise NotImplementedError(
            "Please use a concrete validator that implements Validate."
        )


class StopTimeUpdateValidator(FeedEntityValidator):
    """Validates the stop_time_updates of every trip update of a feed.

  The validator keeps no state between calls: each call to Validate records
  its occurrences into a new OccurrenceRecorder, so one instance can be used
  for many feeds.
  """

    RULES = rules.STOP_TIME_UPDATE_RULES

    def Validate(self, current_time, schedule_index, feed, previous_feed=None):
        # current_time and previous_feed are not needed by these rules
        recorder = OccurrenceRecorder(self.RULES)
        for trip_update in feed.trip_updates:
            self.ValidateTripUpdate(recorder, schedule_index, trip_update)
        groups = recorder.GetRuleGroups()
        log.debug(
            "Validated %d trip updates, %d rules violated",
            len(feed.trip_updates),
            len(groups),
        )
        return groups

    def ValidateTripUpdate(self, recorder, schedule_index, trip_update):
        CheckE041(recorder, trip_update)

        aligner = None
        if trip_update.HasTripId():
            static_entries = _GetStaticEntries(
                schedule_index, trip_update.trip_id
            )
            if static_entries is not None:
                aligner = ScheduleAligner(static_entries)

        stop_sequences = []
        state = NO_PREVIOUS_STOP
        for stop_time_update in trip_update.stop_time_updates:
            state = CheckAdjacentStops(
                recorder, trip_update, state, stop_time_update
            )
            if stop_time_update.HasStopSequence():
                stop_sequences.append(stop_time_update.stop_sequence)
            if aligner is not None:
                static_entry = aligner.Align(stop_time_update)
                if static_entry is not None:
                    CheckE045(
                        recorder, trip_update, stop_time_update, static_entry
                    )
            CheckE040(recorder, trip_update, stop_time_update)
            CheckE042(recorder, trip_update, stop_time_update)
            CheckE043(recorder, trip_update, stop_time_update)
            CheckE044(recorder, trip_update, stop_time_update)

        CheckE002(recorder, trip_update, stop_sequences)
        # TODO: detect out-of-order stop_time_updates that only have stop_id,
        # which needs the static stop order of the trip.


def _GetStaticEntries(schedule_index, trip_id):
    if hasattr(schedule_index, "GetStopEntries"):
        return schedule_index.GetStopEntries(trip_id)
    return schedule_index.get(trip_id)


def ValidateFeed(feed, schedule_index, current_time=None):
    """Run the StopTimeUpdateValidator on feed and return its RuleGroups."""
    return StopTimeUpdateValidator().Validate(
        current_time, schedule_index, feed
    )
