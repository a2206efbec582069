"""
Shared HTML layout and small rendering helpers.
"""
from __future__ import annotations

import html
import os

from fastapi.responses import HTMLResponse

LOGIN_URL = os.getenv("LOGIN_URL", "/login")


def esc(value) -> str:
    """HTML-escape any value, rendering None as an empty string."""
    return html.escape("" if value is None else str(value), quote=True)


def render_page(title: str, body: str, session=None, status_code: int = 200) -> HTMLResponse:
    """
    Shared layout: header with nav, main body, footer. `session` is the caller's
    SessionContext (or None) and only changes the nav links.
    """
    if session:
        account_links = """
          <a href="/dashboard">Dashboard</a>
          <a href="/dashboard/profile">Edit profile</a>
        """
        signed_in_text = f"Signed in &middot; {esc(session.tier.value)} plan"
    else:
        account_links = f'<a href="{esc(LOGIN_URL)}">Log in</a>'
        signed_in_text = "Not signed in"

    page = f"""
    <!DOCTYPE html>
    <html>
      <head>
        <meta charset="utf-8" />
        <title>{esc(title)} | I Am Available</title>
        <style>
          * {{ box-sizing: border-box; }}
          body {{
            font-family: Georgia, "Times New Roman", serif;
            margin: 0;
            background: #faf8f5;
            color: #1c1917;
          }}
          .page {{ max-width: 1040px; margin: 0 auto; padding: 1.5rem 1rem 3rem; }}
          header {{
            display: flex;
            justify-content: space-between;
            align-items: center;
            border-bottom: 1px solid #e7e5e4;
            padding-bottom: 0.75rem;
            margin-bottom: 1.5rem;
          }}
          header h1 {{ font-size: 1.5rem; margin: 0; }}
          nav {{ display: flex; gap: 0.75rem; }}
          nav a {{ color: #1c1917; text-decoration: none; font-family: system-ui, sans-serif; }}
          nav a:hover {{ text-decoration: underline; }}
          .signed-in, .muted {{ color: #78716c; font-size: 0.85rem; font-family: system-ui, sans-serif; }}
          .layout {{ display: grid; grid-template-columns: 260px 1fr; gap: 1.5rem; }}
          .card {{
            background: #fff;
            border: 1px solid #e7e5e4;
            border-radius: 0.5rem;
            padding: 1rem 1.25rem;
            margin-bottom: 1rem;
          }}
          .grid {{ display: grid; grid-template-columns: repeat(auto-fill, minmax(240px, 1fr)); gap: 1rem; }}
          .badge {{
            display: inline-block;
            font: 0.75rem system-ui, sans-serif;
            padding: 2px 8px;
            border-radius: 999px;
            background: #f5f5f4;
            margin: 2px 2px 0 0;
          }}
          .badge.featured {{ background: #fef3c7; }}
          .notice {{ border-left: 3px solid #f59e0b; padding-left: 0.75rem; }}
          .error {{ border-left: 3px solid #dc2626; padding-left: 0.75rem; }}
          label {{ display: block; margin-top: 0.9rem; font-family: system-ui, sans-serif; font-size: 0.9rem; }}
          input:not([type="checkbox"]), select, textarea {{
            width: 100%;
            padding: 0.45rem;
            margin-top: 0.25rem;
            border: 1px solid #d6d3d1;
            border-radius: 0.375rem;
            font: inherit;
          }}
          button {{
            margin-top: 1rem;
            padding: 0.6rem 1.2rem;
            border: none;
            border-radius: 0.375rem;
            background: #1c1917;
            color: #fff;
            cursor: pointer;
          }}
          table {{ width: 100%; border-collapse: collapse; }}
          th, td {{ border-bottom: 1px solid #e7e5e4; padding: 0.5rem; text-align: left; }}
          .stats {{ display: flex; gap: 0.75rem; flex-wrap: wrap; }}
          .stat {{ flex: 0 0 160px; }}
          .stat .value {{ font-size: 1.4rem; font-weight: 600; }}
          progress {{ width: 100%; }}
          footer {{ margin-top: 2.5rem; color: #78716c; font-size: 0.85rem; text-align: center; }}
        </style>
      </head>
      <body>
        <div class="page">
          <header>
            <div>
              <h1>{esc(title)}</h1>
              <div class="signed-in">{signed_in_text}</div>
            </div>
            <nav>
              <a href="/directory">Directory</a>
              <a href="/pricing">Pricing</a>
              {account_links}
            </nav>
          </header>
          <main>
            {body}
          </main>
          <footer>I Am Available &middot; a directory of people open to collaborate.</footer>
        </div>
      </body>
    </html>
    """
    return HTMLResponse(content=page, status_code=status_code)
