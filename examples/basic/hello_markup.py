"""Render a forum post to HTML and to a plain-text snippet."""

from snakk_markup import make_snippet, render_html

post = "**Hello** forum!\n\n> quoted reply\n\n- [rules](/rules)\n- `code`"
print(render_html(post))
print(make_snippet(post, max_chars=40))
