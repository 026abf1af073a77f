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

from collections import OrderedDict

from .problems import log


class Occurrence(object):
    """One violation of a validation rule.

  prefix: str such as "trip_id 1234 has repeating stop_sequence 3". It always
          starts with the label of the trip that violated the rule.
  """

    __slots__ = ("_prefix",)

    def __init__(self, prefix):
        object.__setattr__(self, "_prefix", prefix)

    def __setattr__(self, name, value):
        raise AttributeError("Occurrence objects are read-only")

    @property
    def prefix(self):
        return self._prefix

    def FormatProblem(self, rule):
        """Return the full text of this occurrence of rule."""
        return "%s %s" % (self._prefix, rule.occurrence_suffix)

    def __str__(self):
        return self._prefix

    def __repr__(self):
        return "<Occurrence %r>" % self._prefix

    def __eq__(self, other):
        if not isinstance(other, Occurrence):
            return NotImplemented
        return self._prefix == other._prefix

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self):
        return hash(self._prefix)


class RuleGroup(object):
    """All occurrences of one rule found by a validation pass."""

    __slots__ = ("rule", "occurrences")

    def __init__(self, rule, occurrences):
        if not occurrences:
            raise ValueError("a RuleGroup needs at least one occurrence")
        self.rule = rule
        self.occurrences = tuple(occurrences)

    def GetRuleId(self):
        return self.rule.rule_id

    def IsError(self):
        return self.rule.IsError()

    def IsWarning(self):
        return self.rule.IsWarning()

    def FormatOccurrences(self):
        return [o.FormatProblem(self.rule) for o in self.occurrences]

    def __len__(self):
        return len(self.occurrences)

    def __eq__(self, other):
        if not isinstance(other, RuleGroup):
            return NotImplemented
        return (self.rule is other.rule) and (
            self.occurrences == other.occurrences
        )

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = None

    def __repr__(self):
        return "<RuleGroup %s: %d occurrences>" % (
            self.rule.rule_id,
            len(self.occurrences),
        )


class OccurrenceRecorder(object):
    """Collects the occurrences of a fixed set of rules during one validation
  pass and groups them afterwards.

  Args:
    rules: sequence of ValidationRule in the order their groups are reported
  """

    def __init__(self, rules):
        self._occurrences = OrderedDict()
        for rule in rules:
            self._occurrences[rule.rule_id] = (rule, [])

    def Record(self, rule, prefix):
        """Append an Occurrence with text prefix to the list of rule.

    Raises:
      KeyError if rule was not given to the constructor.
    """
        occurrence = Occurrence(prefix)
        self._occurrences[rule.rule_id][1].append(occurrence)
        log.debug("%s %s", rule.rule_id, occurrence.FormatProblem(rule))
        return occurrence

    def GetOccurrences(self, rule):
        return list(self._occurrences[rule.rule_id][1])

    def GetRuleGroups(self):
        """Return a RuleGroup per rule with occurrences, in rule order.
    """
        groups = []
        for rule, occurrences in self._occurrences.values():
            if occurrences:
                groups.append(RuleGroup(rule, occurrences))
        return groups
