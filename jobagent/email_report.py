"""Send the job digest by email (plain text + HTML)."""
from __future__ import annotations

import re
import smtplib
from datetime import datetime, timezone
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from jobagent.config import get_env
from jobagent.log import get_logger

log = get_logger(__name__)

_CELL = "border:1px solid #ddd;padding:5px 8px;text-align:left"


def _inline(text: str) -> str:
    text = re.sub(r"\*\*(.+?)\*\*", r"<strong>\1</strong>", text)
    text = re.sub(r"(?<!\w)_(.+?)_(?!\w)", r"<em>\1</em>", text)
    return re.sub(r"\[([^\]]+)\]\(([^)]+)\)", r'<a href="\2" style="color:#1a73e8">\1</a>', text)


def md_to_html(md: str) -> str:
    """Render the subset of markdown that ``build_digest`` emits."""
    out: list[str] = []
    in_table = False
    for line in md.split("\n"):
        s = line.strip()
        is_row = s.startswith("|") and s.endswith("|")
        if in_table and not is_row:
            out.append("</table>")
            in_table = False

        if not s:
            continue
        heading = re.match(r"(#{1,3}) (.*)", s)
        if heading:
            level = len(heading.group(1))
            out.append(f"<h{level}>{_inline(heading.group(2))}</h{level}>")
        elif s == "---":
            out.append('<hr style="border:none;border-top:1px solid #e0e0e0">')
        elif is_row:
            cells = [c.strip() for c in s.split("|")[1:-1]]
            if all(set(c) <= set("-: ") for c in cells):
                continue
            tag = "td" if in_table else "th"
            if not in_table:
                out.append('<table style="border-collapse:collapse;font-size:13px">')
                in_table = True
            out.append("<tr>" + "".join(f'<{tag} style="{_CELL}">{_inline(c)}</{tag}>' for c in cells) + "</tr>")
        elif s.startswith("- "):
            out.append(f'<div style="margin:2px 0 2px 16px">• {_inline(s[2:])}</div>')
        else:
            out.append(f"<p>{_inline(s)}</p>")
    if in_table:
        out.append("</table>")
    return "\n".join(out)


def send_digest_email(
    body: str,
    subject: str | None = None,
    to_email: str | None = None,
) -> tuple[bool, str]:
    """Send *body* via SMTP. Returns ``(ok, message)``; never raises."""
    host = get_env("SMTP_HOST")
    user = get_env("SMTP_USER")
    password = get_env("SMTP_PASSWORD")
    from_addr = get_env("FROM_EMAIL", user)
    to_addr = (to_email or get_env("TO_EMAIL")).strip()

    if not all([host, user, password, to_addr]):
        return False, "SMTP not configured (set SMTP_HOST, SMTP_USER, SMTP_PASSWORD, TO_EMAIL in .env)"

    try:
        port = int(get_env("SMTP_PORT", "587"))
    except ValueError:
        port = 587

    if not subject:
        subject = f"Job Matches – {datetime.now(timezone.utc).strftime('%Y-%m-%d')}"

    msg = MIMEMultipart("alternative")
    msg["Subject"] = subject
    msg["From"] = from_addr
    msg["To"] = to_addr
    msg.attach(MIMEText(body, "plain", "utf-8"))
    msg.attach(MIMEText(
        f'<div style="font-family:sans-serif;max-width:900px;color:#333">{md_to_html(body)}</div>',
        "html",
        "utf-8",
    ))

    try:
        with smtplib.SMTP(host, port, timeout=30) as server:
            server.starttls()
            server.login(user, password)
            server.sendmail(from_addr, [to_addr], msg.as_string())
    except (smtplib.SMTPException, OSError) as exc:
        log.error("Email failed: %s", exc)
        return False, str(exc)[:150]
    log.info("Email sent to %s", to_addr)
    return True, "Email sent"
