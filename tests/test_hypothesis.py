"""Property-based tests using hypothesis.

Covers corpus determinism and the aggregation invariants.
"""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from foldbench.benchmarks.micro import new_matrix_size, old_matrix_size
from foldbench.harness.aggregator import Aggregator
from foldbench.harness.micro import ComparisonResult
from foldbench.scenarios.corpus import AMINO_ACIDS, generate

# ── Strategies ──────────────────────────────────────────────────

durations = st.lists(
    st.floats(min_value=0.0, max_value=1e6, allow_nan=False, allow_infinity=False),
    min_size=1,
    max_size=50,
)


# ── Corpus ──────────────────────────────────────────────────────


@pytest.mark.property_based
@settings(max_examples=50)
@given(length=st.integers(min_value=1, max_value=2000), seed=st.integers())
def test_generate_is_deterministic(length, seed):
    first = generate(length, seed)
    second = generate(length, seed)
    assert first.content.encode() == second.content.encode()


@pytest.mark.property_based
@given(length=st.integers(min_value=1, max_value=500), seed=st.integers(0, 2**32))
def test_generate_length_and_alphabet(length, seed):
    residues = generate(length, seed).content.split("\n", 1)[1]
    assert len(residues) == length
    assert set(residues) <= set(AMINO_ACIDS)


# ── Aggregation ─────────────────────────────────────────────────


def summarize(values):
    agg = Aggregator()
    for value in values:
        agg.record("cfg", value)
    return agg.summarize("cfg")


@pytest.mark.property_based
@given(data=st.data(), values=durations)
def test_summary_is_order_independent(data, values):
    shuffled = data.draw(st.permutations(values))
    assert summarize(values) == summarize(shuffled)


@pytest.mark.property_based
@given(values=durations)
def test_min_mean_max(values):
    stats = summarize(values)
    assert stats.min_ms <= stats.mean_ms <= stats.max_ms
    assert stats.sample_count == len(values)


@pytest.mark.property_based
@given(values=durations, split=st.integers(min_value=0, max_value=50))
def test_merge_equals_single_pass(values, split):
    left, right = Aggregator(), Aggregator()
    for value in values[:split]:
        left.record("cfg", value)
    for value in values[split:]:
        right.record("cfg", value)
    assert left.merge(right).summarize("cfg") == summarize(values)


# ── Micro ───────────────────────────────────────────────────────


@pytest.mark.property_based
@given(
    baseline=st.floats(min_value=1e-3, max_value=1e6),
    candidate=st.floats(min_value=0.0, max_value=1e6),
)
def test_improvement_sign(baseline, candidate):
    pct = ComparisonResult("p", iterations=1, baseline_ms=baseline, candidate_ms=candidate).improvement_pct
    if candidate < baseline:
        assert pct > 0
    elif candidate > baseline:
        assert pct < 0
    else:
        assert pct == 0


@pytest.mark.property_based
@given(length=st.integers(min_value=1, max_value=3000), data=st.data())
def test_matrix_size_formula(length, data):
    window = data.draw(st.integers(min_value=1, max_value=length))
    assert new_matrix_size(length, window) == old_matrix_size(length, window)
