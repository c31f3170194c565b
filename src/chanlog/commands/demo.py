"""chanlog demo — walk through the logger features on a simulated game loop.

Runs a scripted session with per-subsystem loggers: basic output,
channel filtering, throttled messages inside a frame loop, nested
contexts, assertions and lazy conditional logging. The loop uses a
simulated frame clock, so the throttling output is deterministic.

With --export, the session history is also dumped to a text file.
"""

from chanlog.lib.log_lib import (
    Channel, FanoutSink, LogHistory, LogLevel, LogRuntime, Logger,
    RateLimiter, get_runtime,
)
from chanlog.output import print_ok, print_step


class FrameClock:
    """Monotonic clock advanced by hand, one frame at a time."""

    def __init__(self, fps=60):
        self.fps = fps
        self.frames = 0

    def __call__(self):
        return self.frames / self.fps

    def tick(self, frames=1):
        self.frames += frames


def register(subparsers, parents):
    """Register the 'demo' subcommand."""
    p = subparsers.add_parser(
        "demo",
        parents=parents,
        help="Run a scripted logging session",
    )
    p.add_argument("--frames", type=int, default=180, metavar="N",
                   help="Frames to simulate in the throttling loop (default: 180)")
    p.add_argument("--export", metavar="PATH", default=None,
                   help="Write the session history to a text file")
    p.set_defaults(func=run)


def build_runtime(clock):
    """A runtime sharing the default settings and sink, with a frame clock."""
    base = get_runtime()
    history = LogHistory(clock=clock)
    runtime = LogRuntime(
        settings=base.settings,
        environment=base.environment,
        sink=FanoutSink(base.sink, history),
        limiter=RateLimiter(clock=clock),
        enabled=base.enabled,
    )
    return runtime, history


def run_session(runtime, clock, frames=180):
    """Drive the scripted session against ``runtime``."""
    gameplay = Logger("Gameplay", (0, 255, 255), channel=Channel.GAMEPLAY, runtime=runtime)
    audio = Logger("Audio", (255, 235, 4), channel=Channel.AUDIO, runtime=runtime)
    network = Logger("Network", (0, 255, 0), channel=Channel.NETWORK, runtime=runtime)
    perf = Logger("Perf", (255, 0, 255), channel=Channel.PERFORMANCE, runtime=runtime)

    health, enemies, debug_mode = 100.0, 5, True

    print_step(1, 5, "Basic logging and channels")
    gameplay.info("Game started!")
    audio.info("Audio system initialized")
    network.info("Connected to server")
    perf.info("Frame render time: 16ms")
    gameplay.warning("Player took damage")

    print_step(2, 5, "Throttled logging")
    for _ in range(frames):
        gameplay.log_throttled("This message is rate-limited", 2.0)
        perf.log_throttled(f"FPS: {clock.fps:.1f}", 1.0, key="fps")
        clock.tick()

    print_step(3, 5, "Contexts")
    with gameplay.context("Level Loading"):
        gameplay.info("Loading assets")
        with gameplay.context("Enemy Spawner"):
            gameplay.info(f"Spawned {enemies} enemies")
        gameplay.info("Level load complete")
    with network.context("Network"), network.context("Authentication"):
        network.info("Authentication successful")
    gameplay.info("Ready to play")

    print_step(4, 5, "Assertions")
    with gameplay.context("Combat"):
        health -= 125.0
        result = gameplay.assert_that(health >= 0, "Health cannot be negative!")
        if not result:
            health = 0.0
        gameplay.validate_range(health, 0, 100, "health")
        gameplay.validate_not_null(None, "target")
        gameplay.log_if(health <= 20, "CRITICAL HEALTH!", LogLevel.ERROR)

    print_step(5, 5, "Conditional logging")
    gameplay.log_if(debug_mode, "Debug mode is enabled")
    gameplay.log_if(
        lambda: debug_mode and health < 50,
        lambda: f"Debug Info - Health: {health}, Enemies: {enemies}",
    )


def run(args):
    clock = FrameClock()
    runtime, history = build_runtime(clock)
    run_session(runtime, clock, frames=args.frames)

    if args.export:
        path = history.export_text(args.export)
        print_ok(f"Exported {len(history)} log lines to {path}")
    return 0
