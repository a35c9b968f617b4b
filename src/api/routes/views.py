"""Client views: login/register, profile editor, QR panel, public QR card.

Pages are static HTML; all data goes through the JSON API with the token
kept in localStorage. Share uses the first capability the browser has:
native share, then clipboard, then opening the profile link in a new tab.
"""

import html
import json
import logging

from fastapi import APIRouter
from fastapi.responses import HTMLResponse, RedirectResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["views"], include_in_schema=False)

API_BASE = "/api"

_COMMON_SCRIPT = f"""
const API = "{API_BASE}";
const getToken = () => localStorage.getItem("token");
const setToken = (t) => t ? localStorage.setItem("token", t) : localStorage.removeItem("token");

async function api(method, path, body) {{
    const headers = {{"Content-Type": "application/json"}};
    const token = getToken();
    if (token) headers["Authorization"] = "Bearer " + token;
    const res = await fetch(API + path, {{method, headers, body: body ? JSON.stringify(body) : undefined}});
    const data = await res.json().catch(() => ({{}}));
    if (res.status === 401) {{ setToken(null); location.href = "/login"; }}
    if (!res.ok) throw new Error(data.detail || "Request failed");
    return data;
}}

function showError(el, err) {{ el.textContent = err ? err.message : ""; }}

function logout() {{ setToken(null); location.href = "/login"; }}
"""


def _js_string(value: str) -> str:
    """JS string literal that cannot close the surrounding <script> tag."""
    return json.dumps(value).replace("<", "\\u003c")


def _page(title: str, body: str, script: str = "") -> HTMLResponse:
    content = f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{html.escape(title)} - Profile QR</title>
    <style>
        body {{ font-family: system-ui, -apple-system, sans-serif; margin: 0; background: #f5f5f5; color: #333; }}
        nav {{ background: #007bff; padding: 12px 24px; }}
        nav a {{ color: white; margin-right: 16px; text-decoration: none; }}
        main {{ max-width: 640px; margin: 32px auto; background: white; padding: 24px; border-radius: 8px; box-shadow: 0 2px 4px rgba(0,0,0,0.1); }}
        label {{ display: block; margin-top: 12px; font-size: 14px; }}
        input, select {{ width: 100%; padding: 8px; margin-top: 4px; box-sizing: border-box; }}
        button {{ margin-top: 16px; padding: 8px 16px; background: #007bff; color: white; border: 0; border-radius: 4px; cursor: pointer; }}
        .error {{ color: #c0392b; min-height: 1em; }}
        .avatar {{ width: 64px; height: 64px; border-radius: 50%; }}
        .qr img {{ width: 240px; height: 240px; }}
    </style>
</head>
<body>
    <nav><a href="/profile">Profile</a><a href="/qrcode">QR Code</a><a href="#" onclick="logout()">Logout</a></nav>
    <main>{body}</main>
    <script>{_COMMON_SCRIPT}{script}</script>
</body>
</html>"""
    return HTMLResponse(content=content)


@router.get("/")
def index():
    return RedirectResponse(url="/profile")


@router.get("/login")
def login_page():
    body = """
    <h1>Sign in</h1>
    <form id="login">
        <label>Email<input name="email" type="email" required></label>
        <label>Password<input name="password" type="password" required></label>
        <button type="submit">Login</button>
    </form>
    <h2>Create an account</h2>
    <form id="register">
        <label>Name<input name="name" required></label>
        <label>Email<input name="email" type="email" required></label>
        <label>Password<input name="password" type="password" required></label>
        <button type="submit">Register</button>
    </form>
    <p class="error" id="error"></p>
    """
    script = """
    const errorEl = document.getElementById("error");
    for (const [id, path] of [["login", "/auth/login"], ["register", "/auth/register"]]) {
        document.getElementById(id).addEventListener("submit", async (e) => {
            e.preventDefault();
            showError(errorEl, null);
            try {
                const data = await api("POST", path, Object.fromEntries(new FormData(e.target)));
                setToken(data.token);
                location.href = "/profile";
            } catch (err) { showError(errorEl, err); }
        });
    }
    """
    return _page("Sign in", body, script)


@router.get("/profile")
def profile_page():
    body = """
    <h1>Profile</h1>
    <img class="avatar" id="avatar" alt="avatar">
    <form id="profile">
        <label>Name<input name="name" required></label>
        <label>Email<input name="email" type="email" required></label>
        <label>Membership
            <select name="membership">
                <option>Basic</option><option>Premium</option><option>Enterprise</option>
            </select>
        </label>
        <button type="submit">Save</button>
    </form>
    <form id="avatar-form">
        <label>Avatar URL<input name="avatarUrl" type="url" required></label>
        <button type="submit">Change avatar</button>
    </form>
    <p class="error" id="error"></p>
    """
    script = """
    if (!getToken()) location.href = "/login";
    const errorEl = document.getElementById("error");
    const form = document.getElementById("profile");
    function render(user) {
        form.name.value = user.name;
        form.email.value = user.email;
        form.membership.value = user.membership;
        document.getElementById("avatar").src = user.avatar;
    }
    api("GET", "/users/profile").then(render).catch((err) => showError(errorEl, err));
    form.addEventListener("submit", async (e) => {
        e.preventDefault();
        showError(errorEl, null);
        try { render(await api("PUT", "/users/profile", Object.fromEntries(new FormData(form)))); }
        catch (err) { showError(errorEl, err); }
    });
    document.getElementById("avatar-form").addEventListener("submit", async (e) => {
        e.preventDefault();
        showError(errorEl, null);
        try { render(await api("POST", "/users/avatar", Object.fromEntries(new FormData(e.target)))); }
        catch (err) { showError(errorEl, err); }
    });
    """
    return _page("Profile", body, script)


@router.get("/qrcode")
def qrcode_page():
    body = """
    <h1>My QR Code</h1>
    <label>Format
        <select id="format"><option value="png">PNG</option><option value="svg">SVG</option></select>
    </label>
    <button id="generate">Generate QR Code</button>
    <div class="qr" id="qr" hidden>
        <img id="qr-img" alt="QR code">
        <pre id="payload"></pre>
        <button id="download">Download</button>
        <button id="share">Share</button>
    </div>
    <p class="error" id="error"></p>
    """
    script = """
    if (!getToken()) location.href = "/login";
    const errorEl = document.getElementById("error");
    let current = null;
    document.getElementById("generate").addEventListener("click", async () => {
        showError(errorEl, null);
        const fmt = document.getElementById("format").value;
        try {
            current = await api("POST", "/qrcode/generate?format=" + fmt);
            current.format = fmt;
            document.getElementById("qr-img").src = current.qrCode;
            document.getElementById("payload").textContent = JSON.stringify(current.userData, null, 2);
            document.getElementById("qr").hidden = false;
        } catch (err) { showError(errorEl, err); }
    });
    document.getElementById("download").addEventListener("click", () => {
        const link = document.createElement("a");
        link.download = current.userData.name + "_qrcode." + current.format;
        link.href = current.qrCode;
        link.click();
    });
    document.getElementById("share").addEventListener("click", async () => {
        const url = current.userData.profileUrl;
        const title = current.userData.name + " - Profile";
        try {
            if (navigator.share) { await navigator.share({title, url}); return; }
            if (navigator.clipboard) { await navigator.clipboard.writeText(url); alert("Profile link copied"); return; }
        } catch (err) { if (err.name === "AbortError") return; }
        window.open(url, "_blank");
    });
    """
    return _page("QR Code", body, script)


@router.get("/user/{user_id}")
def public_user_page(user_id: str):
    body = """
    <h1 id="name"></h1>
    <img class="avatar" id="avatar" alt="avatar">
    <p id="details"></p>
    <div class="qr"><img id="qr-img" alt="QR code"></div>
    <p class="error" id="error"></p>
    """
    script = f"""
    api("GET", "/qrcode/user/" + encodeURIComponent({_js_string(user_id)}))
        .then((data) => {{
            document.getElementById("name").textContent = data.user.name;
            document.getElementById("details").textContent = data.user.email + " · " + data.user.membership;
            document.getElementById("avatar").src = data.avatar;
            document.getElementById("qr-img").src = data.qrCode;
        }})
        .catch((err) => showError(document.getElementById("error"), err));
    """
    return _page("User", body, script)
