from typing import Iterable, Optional

from kicker_rank.models import Snapshot


def player_label(p: Snapshot) -> str:
	return f"{p.name}({p.rating})"


def team_label(team: Iterable[Snapshot]) -> str:
	return ", ".join(player_label(p) for p in team)


def prob(p: float) -> str:
	return f"{p:.2f}"


def score(result: tuple[int, int]) -> str:
	return f"{result[0]}:{result[1]}"


def mono_table(
	rows: list[list[str]],
	headers: Optional[list[str]] = None,
	align: Optional[str] = None,
) -> str:
	"""Render a simple monospaced table for the console.

	- Pads columns to the widest cell
	- Includes a header divider if headers are provided
	- align: one character per column, "l" (default) or "r"
	"""
	# Normalize all to strings and compute column count
	norm_rows = [[str(c) for c in r] for r in rows]
	col_count = max((len(r) for r in norm_rows), default=0)
	if headers:
		headers = [str(h) for h in headers]
		col_count = max(col_count, len(headers))

	def pad_row(r: Iterable[str]) -> list[str]:
		lst = list(r)
		if len(lst) < col_count:
			lst += [""] * (col_count - len(lst))
		return lst

	if headers:
		headers = pad_row(headers)
	norm_rows = [pad_row(r) for r in norm_rows]

	widths = [0] * col_count
	if headers:
		for i, cell in enumerate(headers):
			widths[i] = max(widths[i], len(cell))
	for r in norm_rows:
		for i, cell in enumerate(r):
			widths[i] = max(widths[i], len(cell))

	aligns = (align or "").ljust(col_count, "l")

	def fmt_row(r: list[str]) -> str:
		cells = (
			r[i].rjust(widths[i]) if aligns[i] == "r" else r[i].ljust(widths[i])
			for i in range(col_count)
		)
		return " | ".join(cells).rstrip()

	lines: list[str] = []
	if headers:
		lines.append(fmt_row(headers))
		lines.append("-+-".join("-" * w for w in widths))
	for r in norm_rows:
		lines.append(fmt_row(r))

	return "\n".join(lines)
