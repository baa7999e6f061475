import unittest

from spoon.services.cooldown import CooldownTracker


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


class TestCooldownTracker(unittest.TestCase):
    def setUp(self):
        self.clock = FakeClock()
        self.tracker = CooldownTracker(window_seconds=5.0, clock=self.clock)

    def test_second_call_within_window_is_rejected(self):
        self.assertTrue(self.tracker.try_acquire("https://github.com/a/b"))
        self.clock.now += 4.9
        self.assertFalse(self.tracker.try_acquire("https://github.com/a/b"))
        self.assertAlmostEqual(self.tracker.retry_after("https://github.com/a/b"), 0.1, places=6)

    def test_accepted_again_after_window(self):
        self.assertTrue(self.tracker.try_acquire("https://github.com/a/b"))
        self.clock.now += 5.0
        self.assertTrue(self.tracker.try_acquire("https://github.com/a/b"))

    def test_rejection_does_not_extend_window(self):
        self.tracker.try_acquire("k")
        self.clock.now += 3
        self.assertFalse(self.tracker.try_acquire("k"))
        self.clock.now += 2
        self.assertTrue(self.tracker.try_acquire("k"))

    def test_keys_are_independent(self):
        self.assertTrue(self.tracker.try_acquire("https://github.com/a/b"))
        self.assertTrue(self.tracker.try_acquire("https://github.com/a/c"))

    def test_expired_entries_are_evicted(self):
        for i in range(10):
            self.tracker.try_acquire(f"key-{i}")
        self.assertEqual(len(self.tracker), 10)
        self.clock.now += 6
        self.tracker.try_acquire("fresh")
        self.assertEqual(len(self.tracker), 1)
        self.assertEqual(self.tracker.retry_after("key-0"), 0.0)


if __name__ == "__main__":
    unittest.main()
