#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""Histogram regression tests against a small real-world data set."""

# Copyright © 2015 Carson Farmer <carsonfarmer@gmail.com>
# All rights reserved. MIT Licensed.

from collections import Counter

from msfstore import Histogram

SEPAL_LENGTH = [5.1, 4.9, 4.7, 4.6, 5.0, 5.4, 4.6, 5.0, 4.4, 4.9, 5.4, 4.8,
                4.8, 4.3, 5.8, 5.7, 5.4, 5.1, 5.7, 5.1, 5.4, 5.1, 4.6, 5.1,
                4.8, 5.0, 5.0, 5.2, 5.2, 4.7, 4.8, 5.4, 5.2, 5.5, 4.9, 5.0,
                5.5, 4.9, 4.4, 5.1, 5.0, 4.5, 4.4, 5.0, 5.1, 4.8, 5.1, 4.6,
                5.3, 5.0, 7.0, 6.4, 6.9, 5.5, 6.5, 5.7, 6.3, 4.9, 6.6, 5.2,
                5.0, 5.9, 6.0, 6.1, 5.6, 6.7, 5.6, 5.8, 6.2, 5.6, 5.9, 6.1,
                6.3, 6.1, 6.4, 6.6, 6.8, 6.7, 6.0, 5.7, 5.5, 5.5, 5.8, 6.0,
                5.4, 6.0, 6.7, 6.3, 5.6, 5.5, 5.5, 6.1, 5.8, 5.0, 5.6, 5.7,
                5.7, 6.2, 5.1, 5.7, 6.3, 5.8, 7.1, 6.3, 6.5, 7.6, 4.9, 7.3,
                6.7, 7.2, 6.5, 6.4, 6.8, 5.7, 5.8, 6.4, 6.5, 7.7, 7.7, 6.0,
                6.9, 5.6, 7.7, 6.3, 6.7, 7.2, 6.2, 6.1, 6.4, 7.2, 7.4, 7.9,
                6.4, 6.3, 6.1, 7.7, 6.3, 6.4, 6.0, 6.9, 6.7, 6.9, 5.8, 6.8,
                6.7, 6.7, 6.3, 6.5, 6.2, 5.9]

SETOSA = SEPAL_LENGTH[:50]
VIRGINICA = SEPAL_LENGTH[100:]


def test_iris_regression():
    h = Histogram(1).update(SEPAL_LENGTH)
    counts = Counter(SEPAL_LENGTH)
    assert h.total() == len(SEPAL_LENGTH)
    assert len(h) == len(counts)
    for value, count in counts.items():
        assert h.read(value) == count

    raw = h.to_raw()
    assert raw.locations == sorted(counts)
    assert raw.weights == [counts[v] for v in sorted(counts)]


def test_iris_coarse_regression():
    h = Histogram(0).update(SEPAL_LENGTH)
    assert h.total() == len(SEPAL_LENGTH)
    assert set(h.keys()) <= {"4e+00", "5e+00", "6e+00", "7e+00", "8e+00"}
    assert h.read(7.9) == len([v for v in SEPAL_LENGTH if v > 7.5])

    fine = Histogram(1).update(SEPAL_LENGTH)
    assert Histogram(0).combine(fine) == h
    assert Histogram.deserialize(fine.serialize(), 0) == h


def test_iris_split_regression():
    whole = Histogram(1).update(SEPAL_LENGTH)
    first = Histogram(1).update(SEPAL_LENGTH[:75])
    second = Histogram(1).update(SEPAL_LENGTH[75:])
    assert first.combine(second) == whole
    assert whole.cancel(second) == first.combine(second.cancel(second))

    overlap = Histogram(1).update(SETOSA).min(Histogram(1).update(VIRGINICA))
    shared = set(SETOSA) & set(VIRGINICA)
    assert sorted(overlap.to_raw().locations) == sorted(shared)
    for value in shared:
        assert overlap.read(value) == min(SETOSA.count(value),
                                          VIRGINICA.count(value))
