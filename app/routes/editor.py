import logging
import os
from typing import List

from fastapi import APIRouter, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from app.layout import LOGIN_URL, esc, render_page
from app.security import allow_profile_save, attach_csrf_cookie, csrf_token_for, validate_csrf
from app.session import get_session_context
from core.database import get_profile_by_id, update_profile
from core.profiles.models import AVAILABILITY_LABELS, OPEN_TO_LABELS, Availability
from core.tiers import ProfileEditError, format_limit, sanitize_profile_edit, tier_limits_for

router = APIRouter()
log = logging.getLogger("profile_editor")

EDIT_RATE_LIMIT = int(os.getenv("EDIT_RATE_LIMIT", "10"))  # saves per minute per client


def _editor_form(profile, csrf_token: str) -> str:
    limits = tier_limits_for(profile.tier)

    availability_radios = ""
    for option in Availability:
        checked = " checked" if profile.availability == option else ""
        availability_radios += (
            f'<label><input type="radio" name="availability" value="{option.value}"{checked} /> '
            f"{esc(AVAILABILITY_LABELS[option])}</label>"
        )

    open_to_boxes = ""
    for tag, label in OPEN_TO_LABELS.items():
        checked = " checked" if tag in profile.open_to else ""
        open_to_boxes += (
            f'<label><input type="checkbox" name="open_to" value="{tag.value}"{checked} /> {esc(label)}</label>'
        )

    skills_text = esc("\n".join(profile.skills))
    links_text = esc("\n".join(profile.portfolio_links))
    if limits.portfolio_links == 0:
        links_field = '<p class="muted">Upgrade to Pro to add portfolio links.</p>'
    else:
        links_field = f"""
        <label>Portfolio links, one per line
          <span class="muted">{len(profile.portfolio_links)} of {format_limit(limits.portfolio_links)} links</span>
          <textarea name="portfolio_links" rows="3">{links_text}</textarea>
        </label>
        """

    return f"""
    <form class="card" method="post" action="/dashboard/profile">
      <input type="hidden" name="csrf_token" value="{esc(csrf_token)}" />
      <label>Name <input type="text" name="name" value="{esc(profile.name)}" maxlength="100" /></label>
      <label>Role <input type="text" name="role" value="{esc(profile.role)}" maxlength="100" /></label>
      <label>Location <input type="text" name="location" value="{esc(profile.location)}" maxlength="100" /></label>
      <label>Bio <span class="muted">{len(profile.bio)} / {limits.bio_length}</span>
        <textarea name="bio" rows="4" maxlength="{limits.bio_length}">{esc(profile.bio)}</textarea>
      </label>
      <fieldset style="margin-top:0.9rem;">
        <legend class="muted">Availability</legend>
        {availability_radios}
      </fieldset>
      <fieldset style="margin-top:0.9rem;">
        <legend class="muted">Open to</legend>
        {open_to_boxes}
      </fieldset>
      <label>Skills, one per line
        <span class="muted">{len(profile.skills)} of {format_limit(limits.skills)} skills</span>
        <textarea name="skills" rows="3">{skills_text}</textarea>
      </label>
      <label>Contact email <input type="email" name="contact_email" value="{esc(profile.contact_email)}" maxlength="200" /></label>
      <label>Twitter <input type="text" name="twitter" value="{esc(profile.twitter)}" maxlength="100" /></label>
      <label>Telegram <input type="text" name="telegram" value="{esc(profile.telegram)}" maxlength="100" /></label>
      <label>Calendar link <input type="url" name="calendar_link" value="{esc(profile.calendar_link)}" maxlength="300" /></label>
      {links_field}
      <button type="submit">Save profile</button>
    </form>
    """


def _no_profile_page(session):
    body = """
    <div class="card">
      <p>No profile is linked to this account yet.</p>
      <p><a href="/dashboard">Back to dashboard</a></p>
    </div>
    """
    return render_page("Edit profile", body, session=session, status_code=404)


@router.get("/dashboard/profile", response_class=HTMLResponse)
def edit_profile_form(request: Request):
    session, _ = get_session_context(request)
    if not session:
        return RedirectResponse(url=LOGIN_URL, status_code=303)

    profile = get_profile_by_id(session.profile_id) if session.profile_id else None
    if not profile:
        return _no_profile_page(session)

    saved_html = ""
    if request.query_params.get("saved"):
        saved_html = '<div class="card notice"><p>Profile saved.</p></div>'

    csrf_token = csrf_token_for(request)
    response = render_page("Edit profile", saved_html + _editor_form(profile, csrf_token), session=session)
    attach_csrf_cookie(response, csrf_token)
    return response


@router.post("/dashboard/profile")
def save_profile(
    request: Request,
    csrf_token: str = Form(""),
    name: str = Form("", max_length=100),
    role: str = Form("", max_length=100),
    location: str = Form("", max_length=100),
    bio: str = Form(""),
    availability: str = Form("available", max_length=20),
    open_to: List[str] = Form([]),
    skills: str = Form(""),
    contact_email: str = Form("", max_length=200),
    twitter: str = Form("", max_length=100),
    telegram: str = Form("", max_length=100),
    calendar_link: str = Form("", max_length=300),
    portfolio_links: str = Form(""),
):
    session, _ = get_session_context(request)
    if not session:
        return RedirectResponse(url=LOGIN_URL, status_code=303)

    client_host = request.client.host if request.client else "unknown"
    allowed, retry_after = allow_profile_save(session.user_id, client_host, limit=EDIT_RATE_LIMIT)
    if not allowed:
        log.warning("Profile save throttled", extra={"user_id": session.user_id, "retry_after": retry_after})
        body = f'<div class="card error"><p>Too many saves. Try again in {retry_after} seconds.</p></div>'
        response = render_page("Edit profile", body, session=session, status_code=429)
        response.headers["Retry-After"] = str(retry_after)
        return response

    if not validate_csrf(request, csrf_token):
        body = '<div class="card error"><p>Your form expired. Reload the page and try again.</p></div>'
        return render_page("Edit profile", body, session=session, status_code=403)

    profile = get_profile_by_id(session.profile_id) if session.profile_id else None
    if not profile:
        return _no_profile_page(session)

    form = {
        "name": name,
        "role": role,
        "location": location,
        "bio": bio,
        "availability": availability,
        "open_to": open_to,
        "skills": skills,
        "contact_email": contact_email,
        "twitter": twitter,
        "telegram": telegram,
        "calendar_link": calendar_link,
        "portfolio_links": portfolio_links,
    }
    try:
        edit, notices = sanitize_profile_edit(form, profile.tier)
    except ProfileEditError as exc:
        body = f'<div class="card error"><p>{esc(exc)}</p><p><a href="/dashboard/profile">Back to editor</a></p></div>'
        return render_page("Edit profile", body, session=session, status_code=400)

    if notices:
        log.info("Profile edit trimmed to tier limits", extra={"profile_id": profile.id, "tier": profile.tier.value})

    if not update_profile(profile.id, session.user_id, edit):
        body = """
        <div class="card error">
          <p>Could not save this profile. It may have been removed.</p>
          <p><a href="/dashboard">Back to dashboard</a></p>
        </div>
        """
        return render_page("Edit profile", body, session=session, status_code=409)

    log.info("Profile saved", extra={"profile_id": profile.id})
    if not notices:
        return RedirectResponse(url="/dashboard/profile?saved=1", status_code=303)

    items = "".join(f"<li>{esc(n)}</li>" for n in notices)
    body = f"""
    <div class="card notice">
      <p>Profile saved with changes:</p>
      <ul>{items}</ul>
      <p><a href="/dashboard/profile">Back to editor</a> &middot; <a href="/pricing">Compare plans</a></p>
    </div>
    """
    return render_page("Edit profile", body, session=session)
