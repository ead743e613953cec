class SequenceRandom:
    """Replays fixed values from random(), then repeats 'fill' forever."""

    def __init__(self, values=(), fill=0.99):
        self.values = list(values)
        self.fill = fill
        self.calls = 0

    def random(self):
        self.calls += 1
        if self.values:
            return self.values.pop(0)
        return self.fill


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


def run_for(scheduler, clock, total_ms, step_ms=10.0):
    """Moves a fake clock forward in small steps, polling the scheduler each time."""
    end = clock.now + total_ms
    while clock.now < end:
        clock.now += step_ms
        scheduler.run_pending()
