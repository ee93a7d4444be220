import os
from dataclasses import dataclass, field


@dataclass
class ShellSession:
    """
    Process-wide interpreter state.

    pid            -- the interpreter's own process id
    live_children  -- spawned stages not yet waited on
    history        -- the session's History sink
    """
    history: object
    pid: int = field(default_factory=os.getpid)
    live_children: int = 0

    def child_spawned(self):
        self.live_children += 1

    def child_reaped(self):
        if self.live_children <= 0:
            raise RuntimeError("reaped more children than were spawned")
        self.live_children -= 1

    def is_interpreter(self):
        return os.getpid() == self.pid
