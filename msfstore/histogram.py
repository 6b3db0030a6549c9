#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
A mergeable approximate-frequency histogram. Values are projected onto bins
by rounding them to a fixed number of significant decimal digits (the
histogram's *resolution*), and each bin accumulates the weight of every value
that projects onto it.

Unlike streaming histograms with a bin budget, bins are never merged to
satisfy a size limit: storage grows with the number of distinct projected
values, and every bin keeps its exact accumulated weight. This makes
histograms built independently (even at different resolutions) safe to
combine, cancel and intersect after the fact.

Bins are keyed by the formatted projection (e.g. ``'1.23e+02'`` at resolution
2) rather than by float, so that equality between rounded values is exact.
The projection round-trips: decoding a key and projecting it again yields the
same key, which is relied on whenever bins are re-inserted into a new
histogram.

Examples
--------
>>> h = Histogram(resolution=2).insert(123.3, 23.32).insert(23456.43, 11)
>>> h.total()
34.32
>>> h.read(123.31)
23.32
"""

# Copyright © 2015 Carson Farmer <carsonfarmer@gmail.com>
# All rights reserved. MIT Licensed.

import logging
import struct

from sortedcontainers import SortedKeyList
from .utils import project, parse_key, location_order, iterator_types

__all__ = ["Histogram", "RawHist", "DeserializationError",
           "DEFAULT_RESOLUTION", "SERIAL_FORMAT_MAGIC"]

logger = logging.getLogger(__name__)

DEFAULT_RESOLUTION = 3

SERIAL_FORMAT_MAGIC = b"MSF1"
_HEADER = struct.Struct(">4sI")
_DOUBLE_SIZE = 8


class DeserializationError(ValueError):
    """Raised when a byte string cannot be decoded into a histogram.

    The ``histogram`` attribute holds the best-effort result (an empty
    histogram at the requested resolution), so callers that want to carry on
    regardless can do so explicitly.
    """

    def __init__(self, message, histogram=None):
        super(DeserializationError, self).__init__(message)
        self.histogram = histogram


class Histogram(object):
    """A map-backed histogram with a fixed projection resolution."""

    def __init__(self, resolution=DEFAULT_RESOLUTION, registers=None):
        """Create a histogram keeping `resolution` fractional digits per bin.

        Parameters
        ----------
        resolution : int (default=3)
            Number of digits kept after the leading digit when projecting a
            value, so each bin covers ``resolution + 1`` significant digits.
        registers : dict (default=None)
            Optional initial mapping of bin key to weight. It is copied; keys
            are assumed to already be canonical at `resolution`.
        """
        super(Histogram, self).__init__()
        self.resolution = int(resolution)
        self.registers = dict(registers) if registers is not None else {}

    def project(self, value):
        """Return the bin key that `value` falls into."""
        return project(self.resolution, value)

    def _bins(self):
        # A histogram whose registers were dropped reads as empty
        return self.registers if self.registers is not None else {}

    def insert(self, value, weight):
        """Add `weight` to the bin that `value` projects onto.

        The weight is not validated: negative weights are accepted and can
        drive a bin below zero. Returns the histogram itself so that calls
        can be chained.
        """
        key = self.project(value)
        if self.registers is None:
            self.registers = {}
        self.registers[key] = self.registers.get(key, 0.0) + weight
        return self

    def update(self, n, weight=1):
        """Insert a value, or every value of a (possibly nested) iterable.

        `weight` is applied to each inserted value.
        """
        if isinstance(n, iterator_types) and not isinstance(n, (str, bytes)):
            for p in n:
                self.update(p, weight)
        else:
            self.insert(n, weight)
        return self

    def read(self, value):
        """Return the weight in the bin of `value`, or 0.0 if it is empty."""
        return self._bins().get(self.project(value), 0.0)

    def total(self):
        """Return the summed weight of all bins."""
        return sum(self._bins().values())

    def keys(self):
        """Return the keys of all populated bins."""
        return list(self._bins())

    def __len__(self):
        """Return the number of bins in this histogram."""
        return len(self._bins())

    def __contains__(self, value):
        return self.project(value) in self._bins()

    def __eq__(self, other):
        if not isinstance(other, Histogram):
            return NotImplemented
        return (self.resolution == other.resolution and
                self._bins() == other._bins())

    __hash__ = None

    def __repr__(self):
        return "Histogram(resolution=%d, bins=%d)" % (self.resolution,
                                                      len(self))

    def __str__(self):
        """Return a string reprentation of the histogram."""
        if len(self):
            string = "Location\tWeight\n--------\t------\n"
            for location, weight in self.to_raw():
                string += "%s\t%s\n" % (self.project(location), weight)
            string += "--------\t------\n"
            string += "Total weight: %s" % self.total()
            return string
        return "Empty histogram"

    def copy(self):
        """Make a deep copy of this histogram."""
        return type(self)(self.resolution, self._bins())

    def _reinsert(self, other, sign=1.0):
        # Decoded keys are re-projected at this histogram's resolution
        for key, weight in other._bins().items():
            try:
                location = parse_key(key)
            except ValueError:
                logger.debug("Skipping undecodable bin key %r", key)
                continue
            self.insert(location, sign * weight)

    def min(self, other):
        """Return the pointwise minimum over bins populated in both.

        Bins present in only one of the histograms are left out of the result
        entirely (they are not compared against zero), so ``a.min(b)``
        describes where the two histograms overlap.
        """
        out = type(self)(self.resolution)
        theirs = other._bins()
        for key, weight in self._bins().items():
            if key in theirs:
                out.registers[key] = min(weight, theirs[key])
        return out

    def combine(self, other):
        """Return the bin-wise sum of this histogram and `other`.

        The result has this histogram's resolution. The bins of `other` are
        re-projected, so combining with a finer histogram merges its bins and
        combining with a coarser one keeps its coarser bin locations.
        """
        out = type(self)(self.resolution)
        out._reinsert(other)
        out._reinsert(self)
        return out

    def cancel(self, other):
        """Return this histogram with the weights of `other` subtracted.

        Not called subtract because nothing keeps the result non-negative:
        any bin where `other` holds more weight ends up below zero.
        """
        out = type(self)(self.resolution)
        out._reinsert(self)
        out._reinsert(other, sign=-1.0)
        return out

    def __add__(self, other):
        """Combine two histograms into a new one."""
        return self.combine(other)

    def __radd__(self, other):
        """Reverse combine, so that a list of histograms can be `sum`-med."""
        if other == 0:
            return self.copy()
        return self + other

    def __sub__(self, other):
        return self.cancel(other)

    def to_raw(self):
        """Return the bins as a RawHist of sorted locations and weights.

        Each weight is read back by projecting the decoded location, which
        only finds the bin because projections round-trip. Keys that cannot
        be decoded are dropped silently.
        """
        locations = SortedKeyList(key=location_order)
        for key in self._bins():
            try:
                locations.add(parse_key(key))
            except ValueError:
                logger.debug("Dropping undecodable bin key %r", key)
        return RawHist(locations, [self.read(x) for x in locations])

    @classmethod
    def from_raw(cls, raw, resolution=DEFAULT_RESOLUTION):
        """Build a histogram at `resolution` from a RawHist.

        The resolution need not match the one that produced `raw`; the
        locations are simply re-projected.
        """
        hist = cls(resolution)
        for location, weight in raw:
            hist.insert(location, weight)
        return hist

    def serialize(self):
        """Return the histogram encoded as bytes (see `RawHist.to_bytes`)."""
        return self.to_raw().to_bytes()

    @classmethod
    def deserialize(cls, data, resolution=DEFAULT_RESOLUTION):
        """Rebuild a histogram at `resolution` from `serialize` output.

        Raises
        ------
        DeserializationError
            If `data` is not a valid record. The exception's ``histogram``
            attribute holds an empty histogram at `resolution`.
        """
        try:
            raw = RawHist.from_bytes(data)
        except (ValueError, struct.error) as e:
            logger.debug("Could not decode %d bytes: %s", len(data), e)
            raise DeserializationError(str(e), histogram=cls(resolution))
        return cls.from_raw(raw, resolution)

    def to_dict(self):
        """Return a dictionary representation of the histogram."""
        bins = list()
        for location, weight in self.to_raw():
            bins.append({"location": location, "weight": weight})
        info = dict(resolution=self.resolution)
        return dict(bins=bins, info=info)

    @classmethod
    def from_dict(cls, d):
        """Create a Histogram object from a dictionary representation.

        The dictionary must be in the format given by `to_dict`. Together
        with `to_dict` this allows histograms to be passed around as JSON.
        """
        hist = cls(d["info"]["resolution"])
        for b in d["bins"]:
            hist.insert(b["location"], b["weight"])
        return hist


class RawHist(object):
    """Interchange form of a histogram: sorted locations and their weights.

    `locations` is strictly ascending (NaN, if present, comes last) and
    `weights` holds the weight of each location at the same index. A RawHist
    owns its lists and shares nothing with the histogram it came from.
    """
    __slots__ = ['locations', 'weights']

    def __init__(self, locations=(), weights=()):
        super(RawHist, self).__init__()
        self.locations = [float(x) for x in locations]
        self.weights = [float(w) for w in weights]
        if len(self.locations) != len(self.weights):
            raise ValueError("Got %d locations but %d weights." %
                             (len(self.locations), len(self.weights)))

    def __len__(self):
        return len(self.locations)

    def __iter__(self):
        """Iterate over (location, weight) pairs."""
        return zip(self.locations, self.weights)

    def __eq__(self, other):
        if not isinstance(other, RawHist):
            return NotImplemented
        return (self.locations == other.locations and
                self.weights == other.weights)

    __hash__ = None

    def __repr__(self):
        return "RawHist(locations=%r, weights=%r)" % (self.locations,
                                                      self.weights)

    def to_dict(self):
        return dict(locations=list(self.locations), weights=list(self.weights))

    @classmethod
    def from_dict(cls, d):
        return cls(d["locations"], d["weights"])

    def to_bytes(self):
        """Encode as a length-prefixed binary record.

        The layout is the magic ``MSF1`` (4B), the bin count n (uint32), then
        n locations followed by n weights, all big-endian doubles.
        """
        n = len(self)
        out = bytearray(_HEADER.pack(SERIAL_FORMAT_MAGIC, n))
        if n:
            out += struct.pack(">%dd" % (2 * n), *(self.locations +
                                                   self.weights))
        return bytes(out)

    @classmethod
    def from_bytes(cls, data):
        """Decode `to_bytes` output, raising ValueError if it is malformed."""
        mv = memoryview(data)
        if len(mv) < _HEADER.size:
            raise ValueError("Truncated header: got %d bytes, need %d." %
                             (len(mv), _HEADER.size))
        magic, n = _HEADER.unpack_from(mv, 0)
        if magic != SERIAL_FORMAT_MAGIC:
            raise ValueError("Unsupported serialization header %r, expected "
                             "%r." % (magic, SERIAL_FORMAT_MAGIC))
        expected = _HEADER.size + 2 * n * _DOUBLE_SIZE
        if len(mv) != expected:
            raise ValueError("Record of %d bins should be %d bytes, got %d." %
                             (n, expected, len(mv)))
        values = struct.unpack_from(">%dd" % (2 * n), mv, _HEADER.size)
        return cls(values[:n], values[n:])
