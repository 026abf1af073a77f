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

"""
This script can be used to create a source distribution or a wheel of the
gtfsrtvalidator library and the rtfeedvalidator.py script.
"""

import os.path
import re

from setuptools import setup


def _ReadVersion():
    # Read the version without importing the package, which needs the
    # dependencies below to be installed.
    path = os.path.join(os.path.dirname(__file__), "gtfsrtvalidator", "version.py")
    with open(path) as f:
        return re.search(r'__version__ = "([^"]+)"', f.read()).group(1)


VERSION = _ReadVersion()

setup(
    version=VERSION,
    name="gtfsrtvalidator",
    description="GTFS-realtime trip update validation library and tools",
    long_description="This module checks the stop_time_updates of a "
    "GTFS-realtime trip updates feed for consistency, and against the "
    "stop_times of the static GTFS schedule it describes. It includes a "
    "script that validates a feed and prints the violated rules.",
    platforms="OS Independent",
    license="Apache License, Version 2.0",
    packages=["gtfsrtvalidator"],
    py_modules=["rtfeedvalidator"],
    scripts=["rtfeedvalidator.py"],
    python_requires=">=3.7",
    install_requires=["gtfs-realtime-bindings", "protobuf"],
    extras_require={"test": ["pytest"]},
    zip_safe=False,
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Intended Audience :: Information Technology",
        "Intended Audience :: Other Audience",
        "License :: OSI Approved :: Apache Software License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Topic :: Scientific/Engineering :: GIS",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
)
