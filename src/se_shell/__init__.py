"""
se-shell: a command shell over Selenium WebDriver.

Each shell command is a thin pass-through to one selenium call; see
``se_shell.tools`` for the command set and ``se_shell.shell`` for parsing.
"""

__version__ = "0.1.0"
