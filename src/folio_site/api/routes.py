# src/folio_site/api/routes.py
import logging
from typing import List, Tuple

from quart import Blueprint, current_app, g, redirect, render_template, request, url_for

from folio_site.content.models import Entry
from folio_site.content.view_model import (
    StandardContext,
    build_standard_context,
    find_by_type,
    find_by_uid,
    next_related,
)

site_bp = Blueprint("site", __name__)
app_logger = logging.getLogger("quart.app")


@site_bp.before_request
async def connect_content_api():
    """Authenticates against the content API for the handler of this request."""
    gateway = current_app.extensions["content_gateway"]
    g.content_api = await gateway.connect()


async def _load_content() -> Tuple[List[Entry], StandardContext]:
    """Fetches every entry and derives the standard context from them."""
    config = current_app.config["SITE"]
    entries = await g.content_api.query("", page_size=config.page_size)
    standard = build_standard_context(
        entries,
        user_agent=request.headers.get("User-Agent"),
        analytics=config.analytics,
    )
    return entries, standard


@site_bp.route("/")
async def home():
    """Serves the home page."""
    entries, standard = await _load_content()
    home = find_by_type(entries, "home")
    return await render_template("pages/home.html", home=home, **standard.as_template_context())


@site_bp.route("/index", strict_slashes=False)
async def index():
    """Serves the project index; phones are sent to the home page instead."""
    entries, standard = await _load_content()
    if standard.is_phone:
        return redirect(url_for("site.home"))

    index_page = find_by_type(entries, "index")
    return await render_template("pages/index.html", index=index_page, **standard.as_template_context())


@site_bp.route("/about", strict_slashes=False)
async def about():
    entries, standard = await _load_content()
    about_page = find_by_type(entries, "about")
    return await render_template("pages/about.html", about=about_page, **standard.as_template_context())


@site_bp.route("/essays", strict_slashes=False)
async def essays():
    entries, standard = await _load_content()
    return await render_template(
        "pages/essays.html",
        about=find_by_type(entries, "about"),
        essays=find_by_type(entries, "essays"),
        **standard.as_template_context(),
    )


@site_bp.route("/creation", strict_slashes=False)
async def creation():
    entries, standard = await _load_content()
    return await render_template(
        "pages/creation.html",
        about=find_by_type(entries, "about"),
        creation=find_by_type(entries, "creation"),
        **standard.as_template_context(),
    )


@site_bp.route("/case/<project_id>", strict_slashes=False)
async def case(project_id):
    """
    Serves one project. An unknown uid renders the page without a project;
    ``related`` is the next project in the ordering, wrapping to the first.
    """
    entries, standard = await _load_content()
    project_index, project = find_by_uid(standard.projects, project_id)
    if project is None:
        app_logger.warning(f"No project with uid '{project_id}'")

    return await render_template(
        "pages/case.html",
        cases=find_by_type(entries, "projects"),
        project=project,
        project_index=project_index,
        related=next_related(standard.projects, project_index),
        **standard.as_template_context(),
    )


@site_bp.route("/article/<uid>", strict_slashes=False)
async def article(uid):
    """Serves one post, with the next post in the ordering as ``related``."""
    entries, standard = await _load_content()
    post_index, post = find_by_uid(standard.posts, uid)
    if post is None:
        app_logger.warning(f"No post with uid '{uid}'")

    return await render_template(
        "pages/article.html",
        articles=find_by_type(entries, "posts"),
        post=post,
        post_index=post_index,
        related=next_related(standard.posts, post_index),
        **standard.as_template_context(),
    )
