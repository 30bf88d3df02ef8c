# svg.py
# simple SVG writer for traced chains and fitted contours (debug overlays)

def path_d(points):
    if not len(points): return ""
    d=f"M {points[0][0]:.2f} {points[0][1]:.2f}"
    for x,y in points[1:]: d+=f" L {x:.2f} {y:.2f}"
    return d+" Z"

def _xy(rowcol):
    return [(float(c), float(r)) for r, c in rowcol]

def write_svg(size, out_path, chains=(), contours=()):
    """chains (red) and contours (blue) are (row, col) sequences; size = (W,H)."""
    w,h=size
    parts=[f'<svg xmlns="http://www.w3.org/2000/svg" width="{w}" height="{h}" viewBox="0 0 {w} {h}">','<g fill="none" stroke-width="1">']
    for ch in chains:
        parts.append(f'<path d="{path_d(_xy(ch))}" stroke="red" />')
    for ct in contours:
        parts.append(f'<path d="{path_d(_xy(ct))}" stroke="blue" />')
    parts.append('</g></svg>')
    with open(out_path,'w') as f: f.write("\n".join(parts))
    return out_path
