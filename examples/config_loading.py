"""config_loading.py"""

import signal

from pydantic import BaseModel

from flagtree import App, Command
from flagtree.config import ConfigSettings, config_handler
from flagtree.interrupts import cancel_on_signals
from flagtree.matcher import any_of, hidden, path


class WatchConfig(BaseModel):
    root: str = "."
    interval: float = 1.0
    ignore: list[str] = ["build"]


settings = ConfigSettings()


def watch(ctx):
    config = settings.parse(WatchConfig)
    ignored = any_of(hidden(), path(*config.ignore))
    stop, cancel = cancel_on_signals(signal.SIGINT, signal.SIGTERM)
    try:
        for candidate in ctx.args:
            state = "ignored" if ignored.match(candidate) else "watched"
            ctx.printf("%s: %s\n", candidate, state)
        while not stop.wait(config.interval):
            ctx.printf("checking %s\n", config.root)
    finally:
        cancel()


app = App(
    name="watcher",
    subcommands=[Command("watch", action=watch)],
    options=[config_handler(settings)],
)

if __name__ == "__main__":
    # python config_loading.py --json '{"interval": 0.5}' watch src/app.py .git/HEAD
    app.main()
