from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from app.layout import esc, render_page
from app.session import get_session_context
from core.profiles.models import Tier
from core.tiers import TIER_LIMITS, format_limit

router = APIRouter()


def _expiry_label(days) -> str:
    return "Never" if days is None else f"After {days} days inactive"


@router.get("/pricing", response_class=HTMLResponse)
def pricing(request: Request):
    session, _ = get_session_context(request)

    rows = {
        "Skills": lambda limits: format_limit(limits.skills),
        "Bio length": lambda limits: f"{limits.bio_length} characters",
        "Portfolio links": lambda limits: format_limit(limits.portfolio_links),
        "Listing expires": lambda limits: _expiry_label(limits.expires_after_days),
    }

    header = "".join(f"<th>{esc(t.value.title())}</th>" for t in Tier)
    body_rows = ""
    for label, render in rows.items():
        cells = "".join(f"<td>{esc(render(TIER_LIMITS[t]))}</td>" for t in Tier)
        body_rows += f"<tr><th>{esc(label)}</th>{cells}</tr>"

    current = ""
    if session:
        current = f'<p class="muted">You are on the {esc(session.tier.value)} plan.</p>'

    body = f"""
    <div class="card">
      {current}
      <table>
        <thead><tr><th></th>{header}</tr></thead>
        <tbody>{body_rows}</tbody>
      </table>
    </div>
    """
    return render_page("Pricing", body, session=session)
