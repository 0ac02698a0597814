"""simple.py"""

from flagtree import App, Command, InvocationError
from flagtree.flag import bool_flag, string_flag, string_list, string_param
from flagtree.utils import setup_logging


def greet(ctx):
    name = ctx.string("name")
    if not name:
        raise InvocationError("greet: a name is required")
    greeting = f"Hello, {name}!"
    if ctx.root.bool("shout"):
        greeting = greeting.upper()
    ctx.printf("%s\n", greeting)


def tag(ctx):
    ctx.printf("%s: %s\n", ctx.string("target"), ", ".join(ctx.slice("tags")))


async def ping(ctx):
    ctx.printf("pong\n")


app = App(
    name="simple",
    usage="A small Flagtree demo.",
    flags=[bool_flag("shout", help="Upper-case all output."), bool_flag("debug")],
    subcommands=[
        Command(
            "greet",
            usage="Say hello.",
            flags=[string_flag("name", help="Who to greet.")],
            action=greet,
        ),
        Command(
            "tag",
            usage="Attach tags to a target.",
            flags=[string_param("target", required=True), string_list("tags")],
            action=tag,
        ),
        Command("ping", usage="Check that the app runs.", aliases=["p"], action=ping),
    ],
)


@app.before
def configure_logging(ctx):
    if ctx.bool("debug"):
        setup_logging(mode="cli")


if __name__ == "__main__":
    app.main()
