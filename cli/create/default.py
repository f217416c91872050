from burrow import Command, Option, Param


class Create(Command):
    """Create a widget."""

    params = (
        Param("name", type=str, descr="widget name"),
        Param("size", type=float, default=1.0, descr="widget size"),
    )
    options = (
        Option("force", flag="f", toggle=True, descr="overwrite an existing widget"),
        Option("owner", flag="o", type=str, default="nobody", descr="widget owner"),
    )

    def execute(self, name, size, options, context):
        return {"name": name, "size": size, **options, "extras": context.args}
