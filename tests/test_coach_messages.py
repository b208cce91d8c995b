"""Tests for coach_messages."""

import random

from coach_messages import MESSAGES, message_pool, pick_message


class TestMessagePool:
  def test_four_bands_of_four(self):
    assert set(MESSAGES) == {"excellent", "very_good", "good", "needs_work"}
    assert all(len(pool) == 4 for pool in MESSAGES.values())

  def test_pool_follows_tier(self):
    assert message_pool(85) is MESSAGES["excellent"]
    assert message_pool(84) is MESSAGES["very_good"]
    assert message_pool(50) is MESSAGES["good"]
    assert message_pool(12) is MESSAGES["needs_work"]


class TestPickMessage:
  def test_interpolates_first_name(self):
    for idx in range(4):
      assert "Sarah" in pick_message("Sarah", 90, index=idx)

  def test_explicit_index(self):
    expected = MESSAGES["very_good"][2].format(first_name="Sam")
    assert pick_message("Sam", 78, index=2) == expected

  def test_index_wraps(self):
    assert pick_message("Sam", 78, index=5) == pick_message("Sam", 78, index=1)

  def test_default_is_first_message(self):
    assert pick_message("Sam", 40) == MESSAGES["needs_work"][0].format(first_name="Sam")

  def test_seeded_rng_is_reproducible(self):
    a = pick_message("Sam", 60, rng=random.Random(3))
    b = pick_message("Sam", 60, rng=random.Random(3))
    assert a == b
    assert a in [m.format(first_name="Sam") for m in MESSAGES["good"]]

  def test_index_wins_over_rng(self):
    assert pick_message("Sam", 60, rng=random.Random(3), index=0) == \
        MESSAGES["good"][0].format(first_name="Sam")

  def test_braces_in_name_are_kept_literally(self):
    assert "{x}" in pick_message("{x}", 90, index=0)
