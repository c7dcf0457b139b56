# A tiny pub/sub event bus so the exercise never waits on its collaborators.
from typing import Callable, Dict, List

VERDICT = "verdict"        # fn(result: Result)
SCENARIO = "scenario"      # fn(scenario: Scenario)

class EventBus:
    def __init__(self) -> None:
        self._subs: Dict[str, List[Callable]] = {}

    def on(self, topic: str, fn: Callable):
        self._subs.setdefault(topic, []).append(fn)
        return fn

    def off(self, topic: str, fn: Callable):
        subs = self._subs.get(topic, [])
        if fn in subs:
            subs.remove(fn)

    def emit(self, topic: str, *args, **kwargs):
        for fn in list(self._subs.get(topic, [])):
            fn(*args, **kwargs)
