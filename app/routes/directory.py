import logging
from urllib.parse import urlencode

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from app.layout import esc, render_page
from app.session import get_session_context
from core.database import get_all_profiles, get_profile_by_id
from core.directory import (
    active_filter_count,
    filter_profiles,
    filter_spec_from_params,
    location_options,
    skill_options,
)
from core.directory.filtering import SortBy
from core.profiles.models import AVAILABILITY_LABELS, OPEN_TO_LABELS, Availability
from core.tiers import is_expired

router = APIRouter()
log = logging.getLogger("directory")


def _profile_card(profile) -> str:
    badges = ""
    if profile.featured:
        badges += '<span class="badge featured">Featured</span>'
    if profile.availability:
        badges += f'<span class="badge">{esc(AVAILABILITY_LABELS[profile.availability])}</span>'
    skills = "".join(f'<span class="badge">{esc(s)}</span>' for s in profile.skills)
    open_to = ", ".join(OPEN_TO_LABELS[t] for t in profile.open_to)
    subtitle = esc(profile.role)
    if profile.location:
        subtitle += " &middot; " + esc(profile.location)
    open_to_html = f'<p class="muted">Open to: {esc(open_to)}</p>' if open_to else ""
    return f"""
    <div class="card profile-card">
      <div>{badges}</div>
      <h3><a href="/profiles/{esc(profile.id)}">{esc(profile.name)}</a></h3>
      <div class="muted">{subtitle}</div>
      <div>{skills}</div>
      {open_to_html}
    </div>
    """


def _select(name: str, options: list, selected) -> str:
    """`options` is a list of (value, label) pairs."""
    html = f'<select name="{name}">'
    for value, label in options:
        mark = " selected" if value == selected else ""
        html += f'<option value="{esc(value)}"{mark}>{esc(label)}</option>'
    return html + "</select>"


def _filter_panel(spec, profiles, count: int) -> str:
    availability_opts = [("all", "All")] + [
        (a.value, AVAILABILITY_LABELS[a]) for a in (Availability.AVAILABLE, Availability.OPEN)
    ]
    sort_opts = [(SortBy.FEATURED.value, "Featured first"), (SortBy.RECENT.value, "Recently active")]
    location_opts = [("all", "Any location")] + [(loc, loc) for loc in location_options(profiles)]
    skill_opts = [("all", "Any skill")] + [(s, s) for s in skill_options(profiles)]

    open_to_boxes = ""
    for tag, label in OPEN_TO_LABELS.items():
        checked = " checked" if tag in spec.open_to else ""
        open_to_boxes += (
            f'<label><input type="checkbox" name="open_to" value="{tag.value}"{checked} /> {esc(label)}</label>'
        )

    clear_link = ""
    if count:
        clear_link = f'<p><a href="/directory">Clear filters ({count})</a></p>'

    selected_availability = spec.availability.value if spec.availability else "all"
    availability_select = _select("availability", availability_opts, selected_availability)
    sort_select = _select("sort_by", sort_opts, spec.sort_by.value)
    location_select = _select("location", location_opts, spec.location or "all")
    skill_select = _select("skill", skill_opts, spec.skill or "all")

    return f"""
    <form class="card" method="get" action="/directory">
      <label>Search
        <input type="text" name="search" value="{esc(spec.search)}" placeholder="Name, role, skills..." />
      </label>
      <label>Availability {availability_select}</label>
      <label>Sort by {sort_select}</label>
      <label>Location {location_select}</label>
      <label>Skill {skill_select}</label>
      <fieldset style="margin-top:0.9rem;">
        <legend class="muted">Open to</legend>
        {open_to_boxes}
      </fieldset>
      <button type="submit">Apply</button>
      {clear_link}
    </form>
    """


@router.get("/")
def index():
    return RedirectResponse(url="/directory", status_code=303)


@router.get("/directory", response_class=HTMLResponse)
def directory(request: Request):
    session, _ = get_session_context(request)

    params = {
        key: request.query_params.get(key)
        for key in ("search", "availability", "location", "skill", "sort_by")
    }
    params["open_to"] = request.query_params.getlist("open_to")
    spec = filter_spec_from_params(params)

    # expired free listings stay reachable by id but drop out of the directory
    profiles = [p for p in get_all_profiles() if not is_expired(p)]
    visible = filter_profiles(profiles, spec)
    count = active_filter_count(spec)
    log.info(
        "Directory rendered",
        extra={"listed": len(profiles), "visible": len(visible), "active_filters": count},
    )

    if visible:
        results = '<div class="grid">' + "".join(_profile_card(p) for p in visible) + "</div>"
    else:
        results = """
        <div class="card empty-state">
          <h3>No profiles found</h3>
          <p class="muted">Try adjusting your filters or search terms.</p>
          <p><a href="/directory">Clear filters</a></p>
        </div>
        """

    body = f"""
    <p class="muted">Browse {len(profiles)} professionals ready to collaborate. Showing {len(visible)}.</p>
    <div class="layout">
      <aside>{_filter_panel(spec, profiles, count)}</aside>
      <section>{results}</section>
    </div>
    """
    return render_page("Directory", body, session=session)


@router.get("/profiles/{profile_id}", response_class=HTMLResponse)
def profile_page(request: Request, profile_id: str):
    session, _ = get_session_context(request)

    profile = get_profile_by_id(profile_id)
    if not profile:
        body = """
        <div class="card">
          <p>This profile does not exist or was removed.</p>
          <p><a href="/directory">Back to the directory</a></p>
        </div>
        """
        return render_page("Profile not found", body, session=session, status_code=404)

    contact = []
    if profile.contact_email:
        contact.append(f'<a href="mailto:{esc(profile.contact_email)}">Email</a>')
    if profile.twitter:
        contact.append(f'<a href="https://twitter.com/{esc(profile.twitter.lstrip("@"))}">Twitter</a>')
    if profile.telegram:
        contact.append(f'<a href="https://t.me/{esc(profile.telegram.lstrip("@"))}">Telegram</a>')
    if profile.calendar_link:
        contact.append(f'<a href="{esc(profile.calendar_link)}">Book a call</a>')
    links = "".join(f'<li><a href="{esc(u)}">{esc(u)}</a></li>' for u in profile.portfolio_links)
    links_html = f"<ul>{links}</ul>" if links else ""
    contact_html = " &middot; ".join(contact) or '<span class="muted">No contact details shared.</span>'

    nearby = ""
    if profile.location:
        query = urlencode({"location": profile.location})
        nearby = f'<p><a href="/directory?{query}">More people in {esc(profile.location)}</a></p>'

    body = f"""
    {_profile_card(profile)}
    <div class="card">
      <p>{esc(profile.bio)}</p>
      {links_html}
      <p>{contact_html}</p>
    </div>
    {nearby}
    """
    return render_page(profile.name or "Profile", body, session=session)
