from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from app.layout import LOGIN_URL, esc, render_page
from app.session import get_session_context
from core.database import get_profile_by_id
from core.profiles.completeness import missing_checks, profile_completeness
from core.tiers import days_until_expiry, is_expired, tier_limits_for

router = APIRouter()


@router.get("/dashboard", response_class=HTMLResponse)
def dashboard(request: Request):
    session, _ = get_session_context(request)
    if not session:
        return RedirectResponse(url=LOGIN_URL, status_code=303)

    profile = get_profile_by_id(session.profile_id) if session.profile_id else None
    if not profile:
        body = """
        <div class="card">
          <p>You have not created a profile yet.</p>
          <p><a href="/dashboard/profile">Create your profile</a></p>
        </div>
        """
        return render_page("Dashboard", body, session=session)

    completeness = profile_completeness(profile)
    completeness_html = ""
    if completeness < 100:
        todo = "".join(f"<li>{esc(label)}</li>" for label in missing_checks(profile))
        completeness_html = f"""
        <div class="card">
          <h3>Complete your profile <span class="muted">{completeness}%</span></h3>
          <progress max="100" value="{completeness}"></progress>
          <p class="muted">A complete profile gets up to 5x more views.</p>
          <ul>{todo}</ul>
          <p><a href="/dashboard/profile">Complete profile</a></p>
        </div>
        """

    expiry_html = ""
    if tier_limits_for(profile.tier).expires_after_days is not None:
        if is_expired(profile):
            expiry_html = """
            <div class="card error">
              <p>Your free listing has expired and is hidden from search. Save your profile to renew it,
              or <a href="/pricing">upgrade</a> to keep it listed.</p>
            </div>
            """
        else:
            days = days_until_expiry(profile)
            if days is not None:
                expiry_html = f"""
                <div class="card notice">
                  <p>Your free listing expires in {days} day(s) without activity.
                  <a href="/pricing">Upgrade</a> for a listing that never expires.</p>
                </div>
                """

    featured = "Yes" if profile.featured else "No"
    body = f"""
    {expiry_html}
    {completeness_html}
    <div class="stats">
      <div class="stat card">
        <div class="muted">Profile views</div>
        <div class="value">{profile.profile_views}</div>
      </div>
      <div class="stat card">
        <div class="muted">Contact clicks</div>
        <div class="value">{profile.contact_clicks}</div>
      </div>
      <div class="stat card">
        <div class="muted">Plan</div>
        <div class="value">{esc(profile.tier.value.title())}</div>
      </div>
      <div class="stat card">
        <div class="muted">Featured</div>
        <div class="value">{featured}</div>
      </div>
    </div>
    <p><a href="/profiles/{esc(profile.id)}">View public profile</a></p>
    """
    return render_page("Dashboard", body, session=session)
