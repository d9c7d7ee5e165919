APP_ORG = "mdtabs"
APP_NAME = "mdtabs"

CSS_PREVIEW = """
:root { --bg:#ffffff; --fg:#1b1d21; --muted:#5b616e; --code:#f3f4f6; --border:#d9dce1; --link:#1a5fd0; --error:#b42318; }
@media (prefers-color-scheme: dark) {
  :root { --bg:#121417; --fg:#e4e6eb; --muted:#9aa0ab; --code:#1c1f25; --border:#2d323c; --link:#86a8ff; --error:#ff8a7a; }
}
html,body { background:var(--bg); color:var(--fg); }
body { font-family: -apple-system, Segoe UI, Roboto, Helvetica, Arial, sans-serif; margin: 1.5rem; line-height: 1.6; max-width: 52rem; }
h1,h2,h3,h4,h5,h6 { margin-top: 1.3em; line-height: 1.25; }
pre { padding:.75rem; overflow:auto; border-radius:6px; background:var(--code); }
code { background:var(--code); padding:.1rem .3rem; border-radius:4px; }
pre code { padding:0; background:none; }
blockquote { border-left:4px solid var(--border); margin:1em 0; padding:.25em .75em; color:var(--muted); }
table { border-collapse: collapse; }
th, td { border:1px solid var(--border); padding:.4rem .6rem; }
a { color:var(--link); text-decoration:none; } a:hover { text-decoration:underline; }
hr { border:none; border-top:1px solid var(--border); margin:1.5rem 0; }
ul,ol { padding-left:1.5rem; }
li.task-list-item { list-style:none; }
.render-error { border:1px solid var(--error); border-radius:6px; padding:.75rem 1rem; }
.render-error h2 { color:var(--error); margin-top:0; }
"""

HTML_TEMPLATE = """<!doctype html>
<html>
<head>
<meta charset="utf-8" />
<meta name="viewport" content="width=device-width, initial-scale=1.0"/>
<style>{css}</style>
</head>
<body>
{body}
</body>
</html>
"""

# Body of the fallback document; {message} must already be HTML-escaped.
ERROR_TEMPLATE = """<div class="render-error">
<h2>Preview unavailable</h2>
<p>{message}</p>
</div>"""

SETTINGS_GEOMETRY = "window/geometry"
SETTINGS_TAB = "window/tab"
SETTINGS_RECENTS = "file/recent"
MAX_RECENTS = 8
