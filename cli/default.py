from burrow import Command


class Demo(Command):
    """Demo command tree for burrow. Try 'demo create --help'."""

    def execute(self, context):
        self.help(context.commands)
