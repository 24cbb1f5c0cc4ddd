""" Bits and bobs in support of visualizing lists of symbols. """

def render_grid(grid, header=True) -> str:
	"""
	Lay out a rectangular grid of cells as box-drawn text.
	Cells are left-justified; with `header` set, a divider follows the first row.
	"""
	lens = list(map(len, grid))
	assert len(set(lens)) == 1, lens
	grid = [[str(cell) for cell in row] for row in grid]
	width = [max(map(len, column)) for column in zip(*grid)]
	horizontal = '─'
	vertical = ' │ '
	upper = horizontal + '┬' + horizontal
	inner = horizontal + '┼' + horizontal
	lower = horizontal + '┴' + horizontal
	segments = [horizontal*w for w in width]
	lines = [upper.join(segments)]
	for r, row in enumerate(grid):
		if header and r == 1: lines.append(inner.join(segments))
		lines.append(vertical.join(s.ljust(w, ' ') for s,w in zip(row, width)).rstrip())
	lines.append(lower.join(segments))
	return '\n'.join(lines)
