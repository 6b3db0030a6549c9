#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""Mergeable approximate-frequency histograms."""

# Copyright © 2015 Carson Farmer <carsonfarmer@gmail.com>
# All rights reserved. MIT Licensed.

from .histogram import (Histogram, RawHist, DeserializationError,
                        DEFAULT_RESOLUTION)
from . import utils
