"""User-facing message templates."""


def activated(shape: str) -> str:
    return f"Hello! I am now active for **{shape}** in this channel. All messages here will be forwarded."


def already_active(shape: str) -> str:
    return f"I am already active in this channel for **{shape}**."


def not_active(prefix: str = "/") -> str:
    return f"I am not active in this channel. Use `{prefix}activate` first."


def deactivated(shape: str) -> str:
    return f"I am no longer active for **{shape}** in this channel."


def reset_confirmation(shape: str) -> str:
    return (
        f"The long-term memory for **{shape}** in this channel has been reset for you. "
        "You can start a new conversation."
    )


def may_be_silent(shape: str, command: str, prefix: str = "/") -> str:
    return (
        f"The command `{prefix}{command}` has been sent to **{shape}**. "
        "It may have been processed silently."
    )


def no_textual_response(shape: str, command: str, prefix: str = "/") -> str:
    return (
        f"**{shape}** didn't provide a specific textual response for `{prefix}{command}`. "
        "The action might have been completed, or it may require a different interaction."
    )


def usage_hint(command: str, prefix: str = "/") -> str:
    return (
        f"Please provide the necessary arguments for `{prefix}{command}`. "
        f"Example: `{prefix}{command} your arguments`"
    )


def command_failed(shape: str, command: str, prefix: str = "/") -> str:
    return f"Sorry, there was an error processing your `{prefix}{command}` command with **{shape}**."


def conversation_failed() -> str:
    return "Oops, something went wrong while trying to talk to the Shape."
