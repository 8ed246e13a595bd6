from __future__ import annotations

from pathlib import Path

from ..lib.files import write_file
from ..runner import StepCtx
from .base import failing_as

BASH_ALIASES = """\
alias ll='ls -halF'
alias reload='source ~/.bashrc'
alias gco='git checkout'
alias gcob='git checkout -b'
alias gup='git pull --rebase'
alias gst='git status -sb'

go () {
  git fetch
  git checkout $1
  git reset --hard origin/$1
  git status -sb
}

up () {
  local times=${1:-1}
  while [ $times -gt 0 ]; do
    cd ..
    times=$(( $times - 1 ))
  done
}
"""


class ConfigureBashStep:
    step_id = "50_configure_bash"
    description = "Configuring bash"

    def run(self, ctx: StepCtx) -> None:
        path = Path(ctx.cfg.home_dir) / ".bash_aliases"
        with failing_as("failed to write bash aliases"):
            write_file(path, BASH_ALIASES, owner=ctx.cfg.user, dry_run=ctx.dry_run)
