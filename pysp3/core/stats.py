#!/usr/bin/env python
# Copyright 2024 pyins
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Arc Statistics
==============

Summary of an epoch sequence (count, span, sampling, gaps) reported after
an orbit has been written.
"""

import logging
from typing import Dict, Sequence

import numpy as np

from .time import time2datetime

logger = logging.getLogger(__name__)

# Differences larger than this factor times the median sampling count as gap
GAP_FACTOR = 1.5


def arc_statistics(epochs: Sequence) -> Dict[str, float]:
    """
    Compute statistics of an epoch sequence

    Parameters:
    -----------
    epochs : sequence
        Epochs with a ``time`` attribute (GPS seconds)

    Returns:
    --------
    dict
        count, start, end, sampling (median step, s), gaps, duplicates
    """
    times = np.array([epoch.time for epoch in epochs], dtype=np.float64)
    stats = {'count': len(times), 'start': np.nan, 'end': np.nan,
             'sampling': np.nan, 'gaps': 0, 'duplicates': 0}
    if len(times) == 0:
        return stats

    stats['start'] = float(times.min())
    stats['end'] = float(times.max())
    if len(times) > 1:
        dt = np.diff(np.sort(times))
        stats['duplicates'] = int(np.sum(dt == 0))
        steps = dt[dt > 0]
        if len(steps):
            sampling = float(np.median(steps))
            stats['sampling'] = sampling
            stats['gaps'] = int(np.sum(steps > GAP_FACTOR * sampling))
    return stats


def print_statistics(epochs: Sequence) -> Dict[str, float]:
    """Log the statistics of an epoch sequence and return them"""
    stats = arc_statistics(epochs)
    if not stats['count']:
        logger.info("  empty arc")
        return stats
    logger.info(f"  epochs:   {stats['count']}")
    logger.info(f"  start:    {time2datetime(stats['start']):%Y-%m-%d %H:%M:%S}")
    logger.info(f"  end:      {time2datetime(stats['end']):%Y-%m-%d %H:%M:%S}")
    if np.isfinite(stats['sampling']):
        logger.info(f"  sampling: {stats['sampling']:.3f} s")
    if stats['gaps']:
        logger.info(f"  gaps:     {stats['gaps']}")
    if stats['duplicates']:
        logger.info(f"  duplicate epochs: {stats['duplicates']}")
    return stats
