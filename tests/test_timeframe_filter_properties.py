"""Property-based tests for build-window filtering.

Properties covered:
- Deleted members are never dropped, whatever their timestamp
- Kept members are exactly the deleted ones plus those inside [from, to]
- Relative order is preserved
- Checkpoint mode returns the listing unfiltered
"""

from datetime import datetime, timedelta, timezone

from hypothesis import given, settings
from hypothesis import strategies as st

from tests.helpers import make_config
from mks_sync.models.modification import Modification, ModificationType
from mks_sync.sync.timeframe_filter import (
    FilterPolicy,
    apply_filter_policy,
    filter_on_timeframe,
    is_in_timeframe,
    select_filter_policy,
)

BASE = datetime(2024, 1, 1)


@st.composite
def modification_strategy(draw: st.DrawFn) -> Modification:
    """Generate a Modification with a timestamp around the base date."""
    offset_hours = draw(st.integers(min_value=-24 * 30, max_value=24 * 30))
    modified_time = draw(st.one_of(st.none(), st.just(BASE + timedelta(hours=offset_hours))))
    return Modification(
        type=draw(st.sampled_from(list(ModificationType))),
        file_name=draw(st.text(alphabet="abcdefgh", min_size=1, max_size=8)) + ".c",
        folder_name=draw(st.one_of(st.none(), st.sampled_from(["src", "lib/util"]))),
        modified_time=modified_time,
    )


window_strategy = st.tuples(
    st.integers(min_value=-24 * 10, max_value=24 * 10),
    st.integers(min_value=0, max_value=24 * 20),
).map(lambda t: (BASE + timedelta(hours=t[0]), BASE + timedelta(hours=t[0] + t[1])))


class TestTimeframeFilter:
    @given(modifications=st.lists(modification_strategy(), max_size=20), window=window_strategy)
    @settings(max_examples=200)
    def test_deletions_are_never_dropped(self, modifications, window):
        from_time, to_time = window

        kept = filter_on_timeframe(modifications, from_time, to_time)

        for modification in modifications:
            if modification.type == ModificationType.DELETED:
                assert any(k is modification for k in kept)

    @given(modifications=st.lists(modification_strategy(), max_size=20), window=window_strategy)
    @settings(max_examples=200)
    def test_kept_set_and_order(self, modifications, window):
        from_time, to_time = window

        kept = filter_on_timeframe(modifications, from_time, to_time)

        expected = [
            m
            for m in modifications
            if m.type == ModificationType.DELETED
            or (m.modified_time is not None and from_time <= m.modified_time <= to_time)
        ]
        assert [id(m) for m in kept] == [id(m) for m in expected]

    @given(modifications=st.lists(modification_strategy(), max_size=20), window=window_strategy)
    def test_checkpoint_boundary_returns_everything(self, modifications, window):
        from_time, to_time = window

        result = apply_filter_policy(
            FilterPolicy.CHECKPOINT_BOUNDARY, modifications, from_time, to_time
        )

        assert [id(m) for m in result] == [id(m) for m in modifications]

    def test_window_is_inclusive_on_both_ends(self):
        start = datetime(2024, 1, 1)
        end = datetime(2024, 1, 2)

        assert is_in_timeframe(start, start, end)
        assert is_in_timeframe(end, start, end)
        assert not is_in_timeframe(end + timedelta(microseconds=1), start, end)
        assert not is_in_timeframe(None, start, end)

    def test_naive_and_aware_timestamps_compare_as_utc(self):
        start = datetime(2024, 1, 1, tzinfo=timezone.utc)
        end = datetime(2024, 1, 2, tzinfo=timezone.utc)

        assert is_in_timeframe(datetime(2024, 1, 1, 12), start, end)
        assert not is_in_timeframe(datetime(2023, 12, 31, 23), start, end)

    def test_build_cycle_scenario(self):
        modifications = [
            Modification(
                type=ModificationType.MODIFIED,
                file_name="a.c",
                modified_time=datetime(2024, 1, 1, 12),
            ),
            Modification(
                type=ModificationType.MODIFIED,
                file_name="b.c",
                modified_time=datetime(2023, 12, 31),
            ),
            Modification(
                type=ModificationType.DELETED,
                file_name="c.c",
                modified_time=datetime(2023, 1, 1),
            ),
        ]

        kept = filter_on_timeframe(modifications, datetime(2024, 1, 1), datetime(2024, 1, 2))

        assert [m.file_name for m in kept] == ["a.c", "c.c"]


def test_policy_follows_checkpoint_setting():
    assert select_filter_policy(make_config()) is FilterPolicy.TIMEFRAME
    assert (
        select_filter_policy(make_config(checkpoint_on_success=True))
        is FilterPolicy.CHECKPOINT_BOUNDARY
    )
