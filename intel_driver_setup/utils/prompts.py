"""Interactive prompt utilities"""

from .logging import log_prompt


def prompt_yes_no(prompt, default='n'):
    """
    Interactive yes/no prompt

    Only an explicit 'y' or 'yes' counts as agreement. Anything else,
    including an empty answer with default 'n' or a closed stdin
    (no terminal attached), is treated as a decline.

    Args:
        prompt: Question to ask
        default: Default answer used for an empty response ('y' or 'n')

    Returns:
        bool: True for yes, False for no
    """
    hint = "[Y/n]" if default.lower() == 'y' else "(y/N)"
    log_prompt(f"{prompt} {hint}: ")
    try:
        response = input().strip()
    except EOFError:
        print()
        return False

    response = response or default
    return response.lower() in ['y', 'yes']
