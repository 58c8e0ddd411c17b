"""Starter .git-rovo.toml template."""

DEFAULT_TOML = """\
# git-rovo configuration
version = "1.0"

[git]
show_untracked = true        # include untracked files in `git-rovo diff`
timeout = 0                  # seconds per git command, 0 = no timeout
max_untracked_bytes = 1048576

[logger]
enabled = true
level = "info"               # debug | info | warn | error
# file_path = "~/.local/share/git-rovo/git-rovo.log"

[output]
format = "terminal"          # terminal | json
"""
