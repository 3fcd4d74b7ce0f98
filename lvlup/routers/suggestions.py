from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session
from datetime import datetime, timezone as dt_timezone
import html
import requests

from lvlup.database import get_db
from lvlup.auth import get_current_user
from lvlup.config import settings
from lvlup.schemas import CurrentUser, SuggestionRequest, SuggestionResponse
from lvlup import crud
from lvlup.middleware.rate_limit import rate_limit_suggestion
from lvlup.utils.email_sender import EmailDeliveryError, send_email
from lvlup.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/suggestions", tags=["suggestions"])


def _render_suggestion_email(body: SuggestionRequest, user: CurrentUser) -> str:
    meta_rows = [
        ("User ID", user.id),
        ("Email", user.email or "-"),
        ("Username", user.username or "-"),
        ("Name", body.name),
        ("Category", body.category),
        ("Timestamp", datetime.now(dt_timezone.utc).isoformat()),
    ]
    meta_html = "".join(
        f"<tr><td style='padding:4px 8px;color:#555'>{html.escape(k)}</td><td style='padding:4px 8px'><b>{html.escape(str(v))}</b></td></tr>"
        for k, v in meta_rows
    )
    esc_message = html.escape(body.suggestion.strip()).replace("\n", "<br/>")
    return f"""
    <div style='font-family:Arial,sans-serif;font-size:14px;color:#222'>
      <h2 style='margin:0 0 12px'>New Suggestion</h2>
      <table style='border-collapse:collapse;margin-bottom:12px'>{meta_html}</table>
      <div style='padding:12px;border:1px solid #eee;border-radius:6px;background:#fafafa'>
        {esc_message}
      </div>
    </div>
    """


@router.post("/", response_model=SuggestionResponse, status_code=201)
@rate_limit_suggestion
async def submit_suggestion(
    body: SuggestionRequest,
    request: Request,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    """
    Store a suggestion and forward it to the team inbox.

    The suggestion is kept even when forwarding fails; `forwarded` tells the client which happened.
    """
    suggestion = crud.create_suggestion(db, user.id, body.name.strip(), body.category, body.suggestion.strip())

    forwarded = False
    if settings.SUGGESTIONS_TO_EMAIL:
        try:
            send_email(
                to_email=settings.SUGGESTIONS_TO_EMAIL,
                subject=f"[Suggestion/{body.category}] {html.escape(body.name.strip())}",
                html_content=_render_suggestion_email(body, user),
                reply_to=user.email if user.email else None,
                bcc=settings.SUGGESTIONS_BCC_EMAIL or None,
            )
            forwarded = True
        except (EmailDeliveryError, requests.RequestException) as e:
            logger.exception(f"Failed to forward suggestion {suggestion.id}: {e}")

    return SuggestionResponse(id=suggestion.id, forwarded=forwarded, created_at=suggestion.created_at)
