"""Repair a case arm that is missing its ;; terminator."""

from caracol import rewrite

script = b"""\
case "$1" in
  start) run ;;
  stop) halt
esac
"""

print(rewrite(script).decode())
