#!/usr/bin/env python3
"""
Render the laid-out treemap as a self-contained HTML page.

The page holds an inline SVG (one group per leaf), a borough legend,
hover tooltips and CSS fade/scale-in animations. No external scripts.
"""

import html
import os

from common_utils import UNSPECIFIED

DEFAULT_COLOR = '#72757c'
FONT_FAMILY = "'Open Sans', sans-serif"

# shade range applied across siblings, lightest first
SHADE_RANGE = (0.1, 3)
DARKER_FACTOR = 0.7

PAGE_STYLE = '''
    body {
      padding: 20px;
      color: white;
      font-family: 'Open Sans', sans-serif;
    }
    h1 {
      font-size: 32px;
      font-weight: normal;
      text-align: center;
      padding-bottom: 20px;
      animation: fade-in 1s ease both;
    }
    .description {
      display: flex;
      justify-content: center;
      align-items: center;
      padding-bottom: 30px;
    }
    .description p {
      max-width: 600px;
      font-size: 15px;
      text-align: center;
      line-height: 1.6;
    }
    svg {
      display: block;
      margin: 0 auto;
    }
    .cell {
      transform-box: fill-box;
      transform-origin: 0 0;
      animation: grow 1s ease both;
    }
    .node text {
      fill: white;
      font-weight: 500;
      pointer-events: none;
    }
    .node:hover rect {
      stroke: #ac513b;
      stroke-width: 3;
    }
    .legend {
      display: flex;
      justify-content: center;
      margin-top: 5px;
    }
    .legend-item {
      display: flex;
      align-items: center;
      animation: fade-in 1s ease both;
    }
    .legend-item:not(:last-child) {
      margin-right: 40px;
    }
    .legend-swatch {
      width: 20px;
      height: 20px;
      margin-right: 10px;
    }
    .legend-item span {
      font-size: 14px;
    }
    .tooltip {
      display: none;
      position: absolute;
      background: white;
      color: black;
      border: 2px solid #72757c;
      padding: 10px;
      pointer-events: none;
      opacity: 0.9;
    }
    footer {
      font-size: 12px;
      font-weight: bold;
      text-align: center;
      padding-top: 50px;
    }
    @keyframes grow {
      from { opacity: 0; transform: scale(0.1); }
      to { opacity: 1; transform: scale(1); }
    }
    @keyframes fade-in {
      from { opacity: 0; }
      to { opacity: 1; }
    }
'''

TOOLTIP_SCRIPT = '''
    const tooltip = document.getElementById('tooltip');
    document.querySelectorAll('.node').forEach(function (node) {
      node.addEventListener('mouseover', function (event) {
        tooltip.textContent = '';
        const label = document.createElement('strong');
        label.textContent = node.dataset.label;
        tooltip.appendChild(label);
        tooltip.appendChild(document.createElement('br'));
        tooltip.appendChild(document.createTextNode('Complaints: ' + node.dataset.value));
        tooltip.style.left = (event.pageX + 20) + 'px';
        tooltip.style.top = (event.pageY + 20) + 'px';
        tooltip.style.display = 'block';
      });
      node.addEventListener('mouseout', function () {
        tooltip.style.display = 'none';
      });
    });
'''


def hex_to_rgb(color):
    color = color.lstrip('#')
    if len(color) == 3:
        color = ''.join(c * 2 for c in color)
    return tuple(int(color[i:i + 2], 16) for i in (0, 2, 4))


def rgb_to_hex(rgb):
    # round half up, as browsers do
    return '#' + ''.join(f'{max(0, min(255, int(c + 0.5))):02x}' for c in rgb)


def darker(color, k=1):
    """Darken a hex colour by DARKER_FACTOR ** k"""
    factor = DARKER_FACTOR ** k
    return rgb_to_hex(c * factor for c in hex_to_rgb(color))


def sibling_shade(index, count):
    """Map a sibling index linearly onto SHADE_RANGE; a lone child gets the midpoint"""
    low, high = SHADE_RANGE
    if count <= 1:
        return (low + high) / 2
    return low + (high - low) * index / (count - 1)


def leaf_color(rect, palette):
    base = palette.get(rect['parent'], palette.get(UNSPECIFIED, DEFAULT_COLOR))
    return darker(base, sibling_shade(rect['index'], rect['siblings']))


def label_font_size(width, height):
    return min(width / 5, height / 5, 16)


def label_fits(text, font_size, width, height):
    """Rough text box estimate; labels that overflow their rect are dropped"""
    text_width = len(text) * font_size * 0.6
    return text_width <= width and font_size <= height


def _fmt(value):
    return f'{value:.2f}'.rstrip('0').rstrip('.')


def render_leaf(rect, palette):
    """One leaf as a translated SVG group with rect, tooltip title and optional label"""
    width = rect['x1'] - rect['x0']
    height = rect['y1'] - rect['y0']
    label = '' if rect['label'] is None else str(rect['label'])
    text = html.escape(label)
    fill = leaf_color(rect, palette)

    parts = [
        f'    <g class="node" transform="translate({_fmt(rect["x0"])},{_fmt(rect["y0"])})"'
        f' data-label="{text}" data-value="{rect["value"]}">',
        '      <g class="cell">',
        f'        <rect width="{_fmt(width)}" height="{_fmt(height)}" fill="{fill}">'
        f'<title>{text} ({html.escape(str(rect["parent"]))}): {rect["value"]:,} complaints</title></rect>',
    ]

    font_size = label_font_size(width, height)
    if font_size > 0 and label_fits(label, font_size, width, height):
        parts.append(
            f'        <text x="10" y="25" style="font-size: {_fmt(font_size)}px">{text}</text>'
        )

    parts.append('      </g>')
    parts.append('    </g>')
    return '\n'.join(parts)


def render_legend(legend, palette):
    """Legend items for (borough, total) pairs, already in display order"""
    items = []
    for borough, total in legend:
        color = palette.get(borough, palette.get(UNSPECIFIED, DEFAULT_COLOR))
        items.append(
            f'    <div class="legend-item" title="{total:,} complaints">'
            f'<div class="legend-swatch" style="background-color: {color}"></div>'
            f'<span>{html.escape(str(borough))}</span></div>'
        )
    return '\n'.join(items)


def generate_html(rects, legend, settings):
    """Build the full page for the given leaf rects and legend"""
    layout = settings.get('layout', {})
    display = settings.get('display', {})
    palette = display.get('palette', {})
    margin = layout.get('margin', {})
    width = layout.get('width', 1200)
    height = layout.get('height', 800)

    title = html.escape(display.get('title', ''))
    description = html.escape(display.get('description', ''))
    footer = html.escape(display.get('footer', ''))
    background = display.get('background', '#3c3c3c')

    nodes = '\n'.join(render_leaf(rect, palette) for rect in rects)

    return f'''<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>{title}</title>
  <style>{PAGE_STYLE}  </style>
</head>
<body style="background-color: {background};">
  <h1>{title}</h1>
  <div class="description"><p>{description}</p></div>
  <svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="{height}"
       viewBox="0 0 {width} {height}" preserveAspectRatio="xMidYMid meet"
       style="font-family: {FONT_FAMILY};">
  <g transform="translate({margin.get('left', 0)},{margin.get('top', 0)})">
{nodes}
  </g>
  </svg>
  <div class="legend">
{render_legend(legend, palette)}
  </div>
  <div id="tooltip" class="tooltip"></div>
  <footer>{footer}</footer>
  <script>{TOOLTIP_SCRIPT}  </script>
</body>
</html>
'''


def render(rects, legend, settings, output_path):
    """Write the treemap page and return its path"""
    page = generate_html(rects, legend, settings)

    directory = os.path.dirname(output_path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(output_path, 'w', encoding='utf-8') as f:
        f.write(page)

    print(f"✓ Treemap saved to: {output_path}")
    return output_path
