from burrow import Param, command


@command(params=(Param("name", type=str), Param("enabled", type=bool, default=True)))
def gadget(name, enabled, context):
    """Create a gadget (no options record)."""
    return {"name": name, "enabled": enabled, "commands": context.commands}
