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

"""Conversion of GTFS-realtime protocol buffer messages into FeedSnapshot
objects.

Fields are copied only when HasField reports them as set, so a field the
producer left out stays None instead of taking the protocol buffer default.
"""

import os

from google.protobuf.message import DecodeError
from google.transit import gtfs_realtime_pb2

from . import problems as problems_module
from .feed import (
    FeedSnapshot,
    StopTimeEvent,
    StopTimeUpdate,
    TripUpdate,
)

_TRIP_RELATIONSHIPS = gtfs_realtime_pb2.TripDescriptor.ScheduleRelationship
_STOP_RELATIONSHIPS = (
    gtfs_realtime_pb2.TripUpdate.StopTimeUpdate.ScheduleRelationship
)


def _StopTimeEventFromMessage(message):
    return StopTimeEvent(
        delay=message.delay if message.HasField("delay") else None,
        time=message.time if message.HasField("time") else None,
    )


def StopTimeUpdateFromMessage(message):
    kwargs = {}
    if message.HasField("stop_sequence"):
        kwargs["stop_sequence"] = message.stop_sequence
    if message.HasField("stop_id"):
        kwargs["stop_id"] = message.stop_id
    if message.HasField("schedule_relationship"):
        kwargs["schedule_relationship"] = _STOP_RELATIONSHIPS.Name(
            message.schedule_relationship
        )
    if message.HasField("arrival"):
        kwargs["arrival"] = _StopTimeEventFromMessage(message.arrival)
    if message.HasField("departure"):
        kwargs["departure"] = _StopTimeEventFromMessage(message.departure)
    return StopTimeUpdate(**kwargs)


def TripUpdateFromMessage(message, entity_id=None):
    trip_id = None
    schedule_relationship = None
    if message.HasField("trip"):
        if message.trip.HasField("trip_id"):
            trip_id = message.trip.trip_id
        if message.trip.HasField("schedule_relationship"):
            schedule_relationship = _TRIP_RELATIONSHIPS.Name(
                message.trip.schedule_relationship
            )
    return TripUpdate(
        trip_id=trip_id,
        schedule_relationship=schedule_relationship,
        stop_time_updates=[
            StopTimeUpdateFromMessage(stu) for stu in message.stop_time_update
        ],
        entity_id=entity_id,
    )


def FeedSnapshotFromMessage(message):
    """Return a FeedSnapshot with the trip updates of a FeedMessage.

  Entities carrying only vehicle positions or alerts are skipped.
  """
    trip_updates = []
    for entity in message.entity:
        if not entity.HasField("trip_update"):
            continue
        entity_id = entity.id if entity.HasField("id") else None
        trip_updates.append(
            TripUpdateFromMessage(entity.trip_update, entity_id=entity_id)
        )
    timestamp = None
    if message.HasField("header") and message.header.HasField("timestamp"):
        timestamp = message.header.timestamp
    return FeedSnapshot(trip_updates, timestamp=timestamp)


def ReadFeedMessage(
    feed_path, problems=problems_module.default_problem_reporter
):
    """Parse the binary GTFS-realtime file at feed_path.

  Returns:
    A gtfs_realtime_pb2.FeedMessage, or None after reporting a problem.
  """
    if not os.path.isfile(feed_path):
        problems.FeedNotFound(feed_path)
        return None
    with open(feed_path, "rb") as f:
        contents = f.read()
    message = gtfs_realtime_pb2.FeedMessage()
    try:
        message.ParseFromString(contents)
    except DecodeError:
        problems.UnknownFormat(feed_path)
        return None
    return message


def LoadFeedSnapshot(
    feed_path, problems=problems_module.default_problem_reporter
):
    message = ReadFeedMessage(feed_path, problems)
    if message is None:
        return None
    return FeedSnapshotFromMessage(message)
