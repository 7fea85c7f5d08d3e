"""
Web routes: the synchronisations between concepts.

Each action receives the request's ``Concepts`` bundle first, then its
inputs by name (see ``concept_social.router``). Actions only compose
concept calls; all checks live in the concepts.

  Users      /session /users /login /logout
  Friending  /friends /friend/requests /friend/accept /friend/reject
  Posting    /feeds
  Sourcing   /source /content
  Labelling  /label /labels        (label weights live in Sorting)
  Sorting    /sort
  Templating /templates /renders
"""
from typing import Optional

from concept_social.concepts import Concepts
from concept_social.models import SourceTarget, TemplateType
from concept_social.responses import Responses
from concept_social.router import BaseResponse, Route
from concept_social.schemas import (
    ContentArgs,
    Credentials,
    Empty,
    FeedArgs,
    FeedCreate,
    FriendArgs,
    LabelArgs,
    LabelResource,
    LabelWeight,
    PasswordChange,
    PostArgs,
    PostCreate,
    PostOptions,
    PostUpdate,
    RenderArgs,
    RenderRequest,
    RequestFromArgs,
    RequestToArgs,
    ResourceArgs,
    SortRequest,
    SourceArgs,
    SourceCreate,
    TemplateArgs,
    TemplateCreate,
    UsernameArgs,
)

# ──────────────────────────── Users / sessions ────────────────────────────


async def get_session_user(app: Concepts, session) -> BaseResponse:
    user = app.sessioning.get_user(session)
    return BaseResponse(body=await app.authing.get_user_by_id(user))


async def get_users(app: Concepts) -> BaseResponse:
    return BaseResponse(body=await app.authing.get_users())


async def get_user(app: Concepts, username: str) -> BaseResponse:
    return BaseResponse(body=await app.authing.get_user_by_username(username))


async def create_user(app: Concepts, session, username: str, password: str) -> BaseResponse:
    """Register a user and give them an empty label-weight profile."""
    app.sessioning.is_logged_out(session)
    user = await app.authing.register(username, password)
    await app.sorting.register(user)
    return BaseResponse(201, msg="User created successfully!", body=user, location=f"/users/{username}")


async def update_username(app: Concepts, session, username: str) -> BaseResponse:
    user = app.sessioning.get_user(session)
    await app.authing.update_username(user, username)
    return BaseResponse(msg="Username updated successfully!")


async def update_password(
    app: Concepts, session, current_password: str, new_password: str
) -> BaseResponse:
    user = app.sessioning.get_user(session)
    await app.authing.update_password(user, current_password, new_password)
    return BaseResponse(msg="Password updated successfully!")


async def delete_user(app: Concepts, session) -> BaseResponse:
    user = app.sessioning.get_user(session)
    app.sessioning.end(session)
    await app.authing.delete(user)
    return BaseResponse(msg="User deleted!")


async def log_in(app: Concepts, session, username: str, password: str) -> BaseResponse:
    user = await app.authing.authenticate(username, password)
    app.sessioning.start(session, user)
    return BaseResponse(msg="Logged in!")


async def log_out(app: Concepts, session) -> BaseResponse:
    app.sessioning.end(session)
    return BaseResponse(msg="Logged out!")


# ──────────────────────────── Friending ───────────────────────────────────


async def get_friends(app: Concepts, session) -> BaseResponse:
    user = app.sessioning.get_user(session)
    return BaseResponse(body=await app.authing.ids_to_usernames(await app.friending.get_friends(user)))


async def delete_friendship(app: Concepts, session, friend: str) -> BaseResponse:
    user = app.sessioning.get_user(session)
    friend_id = (await app.authing.get_user_by_username(friend))["id"]
    await app.friending.remove_friend(user, friend_id)
    return BaseResponse(msg="Unfriended!")


async def get_requests(app: Concepts, session) -> BaseResponse:
    user = app.sessioning.get_user(session)
    return BaseResponse(body=await Responses.friend_requests(app, await app.friending.get_requests(user)))


async def create_friend_request(app: Concepts, session, to: str) -> BaseResponse:
    user = app.sessioning.get_user(session)
    to_id = (await app.authing.get_user_by_username(to))["id"]
    return BaseResponse(201, body=await app.friending.create_request(user, to_id))


async def delete_friend_request(app: Concepts, session, to: str) -> BaseResponse:
    user = app.sessioning.get_user(session)
    to_id = (await app.authing.get_user_by_username(to))["id"]
    await app.friending.remove_request(user, to_id)
    return BaseResponse(msg="Removed request!")


async def accept_friend_request(app: Concepts, session, from_user: str) -> BaseResponse:
    user = app.sessioning.get_user(session)
    from_id = (await app.authing.get_user_by_username(from_user))["id"]
    await app.friending.accept_request(from_id, user)
    return BaseResponse(msg="Accepted request!")


async def reject_friend_request(app: Concepts, session, from_user: str) -> BaseResponse:
    user = app.sessioning.get_user(session)
    from_id = (await app.authing.get_user_by_username(from_user))["id"]
    await app.friending.reject_request(from_id, user)
    return BaseResponse(msg="Rejected request!")


# ──────────────────────────── Posting ─────────────────────────────────────


async def create_feed(app: Concepts, session, name: str) -> BaseResponse:
    app.sessioning.is_logged_in(session)
    return BaseResponse(201, body=await app.posting.register(name))


async def delete_feed(app: Concepts, session, feed_id: str) -> BaseResponse:
    app.sessioning.is_logged_in(session)
    await app.posting.unregister(feed_id)
    return BaseResponse(msg="Feed deleted!")


async def get_posts(app: Concepts, feed_id: str) -> BaseResponse:
    return BaseResponse(body=await Responses.posts(app, await app.posting.get(feed_id)))


async def create_post(
    app: Concepts, session, feed_id: str, content: str, options: Optional[PostOptions] = None
) -> BaseResponse:
    user = app.sessioning.get_user(session)
    opts = options.model_dump(exclude_none=True) if options else None
    post_id = await app.posting.post(feed_id, user, content, opts)
    return BaseResponse(201, msg="Post created successfully!", body=post_id)


async def update_post(
    app: Concepts,
    session,
    feed_id: str,
    post_id: str,
    content: Optional[str] = None,
    options: Optional[PostOptions] = None,
) -> BaseResponse:
    user = app.sessioning.get_user(session)
    opts = options.model_dump(exclude_none=True) if options else None
    await app.posting.update(feed_id, post_id, user, content, opts)
    return BaseResponse(msg="Post successfully updated!")


async def delete_post(app: Concepts, session, feed_id: str, post_id: str) -> BaseResponse:
    user = app.sessioning.get_user(session)
    await app.posting.unpost(feed_id, post_id, author=user)
    return BaseResponse(msg="Deleted post!")


# ──────────────────────────── Sourcing ────────────────────────────────────


async def add_source(app: Concepts, session, target: SourceTarget, path_uri: str) -> BaseResponse:
    user = app.sessioning.get_user(session)
    return BaseResponse(201, body=await app.sourcing.register(target, path_uri, user))


async def get_sources(app: Concepts, session) -> BaseResponse:
    user = app.sessioning.get_user(session)
    return BaseResponse(body=await app.sourcing.lookup_sources(user))


async def get_source(app: Concepts, session, source_id: str) -> BaseResponse:
    user = app.sessioning.get_user(session)
    return BaseResponse(body=await app.sourcing.lookup_source(source_id, user))


async def delete_source(app: Concepts, session, source_id: str) -> BaseResponse:
    user = app.sessioning.get_user(session)
    await app.sourcing.unregister(source_id, user)
    return BaseResponse(msg="Source deleted!")


async def update_source(app: Concepts, session, source_id: str) -> BaseResponse:
    user = app.sessioning.get_user(session)
    return BaseResponse(body=await app.sourcing.update(source_id, user))


async def get_content(app: Concepts, session, content_id: str) -> BaseResponse:
    user = app.sessioning.get_user(session)
    return BaseResponse(body=await app.sourcing.get(content_id, user))


# ──────────────────────────── Labelling / Sorting ─────────────────────────


async def new_label(app: Concepts, session, label: str, weight: float) -> BaseResponse:
    user = app.sessioning.get_user(session)
    label_id = await app.labelling.register(label, user)
    sort = await app.sorting.lookup(user)
    await app.sorting.add(sort.id, label, weight)
    return BaseResponse(201, body=label_id)


async def set_label(app: Concepts, session, label: str, weight: float) -> BaseResponse:
    user = app.sessioning.get_user(session)
    await app.labelling.lookup(label, user)
    sort = await app.sorting.lookup(user)
    await app.sorting.set(sort.id, label, weight)
    return BaseResponse(msg="Label weight updated!")


async def delete_label(app: Concepts, session, label: str) -> BaseResponse:
    user = app.sessioning.get_user(session)
    await app.labelling.unregister(label, user)
    sort = await app.sorting.lookup(user)
    await app.sorting.remove(sort.id, label)
    return BaseResponse(msg="Label deleted!")


async def get_label(app: Concepts, session, label: str) -> BaseResponse:
    user = app.sessioning.get_user(session)
    doc = await app.labelling.lookup(label, user)
    sort = await app.sorting.lookup(user)
    weight = await app.sorting.get(sort.id, label)
    return BaseResponse(body={**Responses.document(doc), "weight": weight})


async def get_resource_labels(app: Concepts, session, resource: str) -> BaseResponse:
    user = app.sessioning.get_user(session)
    return BaseResponse(body=sorted(await app.labelling.get(resource, user)))


async def add_resource(app: Concepts, session, label: str, resource: str) -> BaseResponse:
    user = app.sessioning.get_user(session)
    await app.labelling.add(resource, label, user)
    return BaseResponse(msg="Resource labelled!")


async def remove_resource(app: Concepts, session, label: str, resource: str) -> BaseResponse:
    user = app.sessioning.get_user(session)
    await app.labelling.remove(resource, label, user)
    return BaseResponse(msg="Resource unlabelled!")


async def sort_resources(app: Concepts, session, resources: list[str]) -> BaseResponse:
    user = app.sessioning.get_user(session)
    sort = await app.sorting.lookup(user)
    return BaseResponse(body=await app.sorting.sort(sort.id, resources))


# ──────────────────────────── Templating ──────────────────────────────────


async def add_template(
    app: Concepts, session, template: str, type: TemplateType, resources: list
) -> BaseResponse:
    user = app.sessioning.get_user(session)
    return BaseResponse(201, body=await app.templating.add(template, type, resources, user))


async def get_templates(app: Concepts, session) -> BaseResponse:
    user = app.sessioning.get_user(session)
    return BaseResponse(body=await app.templating.get_templates(user))


async def remove_template(app: Concepts, session, template_id: str) -> BaseResponse:
    user = app.sessioning.get_user(session)
    await app.templating.remove(template_id, user)
    return BaseResponse(msg="Template removed!")


async def render_template(app: Concepts, session, template_id: str, data: dict) -> BaseResponse:
    user = app.sessioning.get_user(session)
    return BaseResponse(201, body=await app.templating.render(template_id, data, user))


async def get_render(app: Concepts, session, render_id: str) -> BaseResponse:
    app.sessioning.is_logged_in(session)
    return BaseResponse(body=await app.templating.get_render(render_id))


ROUTES: list[Route] = [
    Route("GET", "/session", get_session_user, Empty),
    Route("GET", "/users", get_users, Empty),
    Route("GET", "/users/{username}", get_user, UsernameArgs),
    Route("POST", "/users", create_user, Credentials),
    Route("PATCH", "/users/username", update_username, UsernameArgs),
    Route("PATCH", "/users/password", update_password, PasswordChange),
    Route("DELETE", "/users", delete_user, Empty),
    Route("POST", "/login", log_in, Credentials),
    Route("POST", "/logout", log_out, Empty),
    # Friending
    Route("GET", "/friends", get_friends, Empty),
    Route("DELETE", "/friends/{friend}", delete_friendship, FriendArgs),
    Route("GET", "/friend/requests", get_requests, Empty),
    Route("POST", "/friend/requests/{to}", create_friend_request, RequestToArgs),
    Route("DELETE", "/friend/requests/{to}", delete_friend_request, RequestToArgs),
    Route("PUT", "/friend/accept/{from_user}", accept_friend_request, RequestFromArgs),
    Route("PUT", "/friend/reject/{from_user}", reject_friend_request, RequestFromArgs),
    # Posting
    Route("POST", "/feeds", create_feed, FeedCreate),
    Route("DELETE", "/feeds/{feed_id}", delete_feed, FeedArgs),
    Route("GET", "/feeds/{feed_id}/posts", get_posts, FeedArgs),
    Route("POST", "/feeds/{feed_id}/posts", create_post, PostCreate),
    Route("PATCH", "/feeds/{feed_id}/posts/{post_id}", update_post, PostUpdate),
    Route("DELETE", "/feeds/{feed_id}/posts/{post_id}", delete_post, PostArgs),
    # Sourcing
    Route("POST", "/source/{target}", add_source, SourceCreate),
    Route("GET", "/source", get_sources, Empty),
    Route("GET", "/source/{source_id}", get_source, SourceArgs),
    Route("DELETE", "/source/{source_id}", delete_source, SourceArgs),
    Route("PUT", "/source/{source_id}/update", update_source, SourceArgs),
    Route("GET", "/content/{content_id}", get_content, ContentArgs),
    # Labelling / Sorting
    Route("POST", "/label/{label}/{weight}", new_label, LabelWeight),
    Route("PUT", "/label/{label}/{weight}", set_label, LabelWeight),
    Route("DELETE", "/label/{label}", delete_label, LabelArgs),
    Route("GET", "/label/{label}", get_label, LabelArgs),
    Route("GET", "/labels", get_resource_labels, ResourceArgs),
    Route("PUT", "/label/{label}/resources/{resource}", add_resource, LabelResource),
    Route("DELETE", "/label/{label}/resources/{resource}", remove_resource, LabelResource),
    Route("POST", "/sort", sort_resources, SortRequest),
    # Templating
    Route("POST", "/templates", add_template, TemplateCreate),
    Route("GET", "/templates", get_templates, Empty),
    Route("DELETE", "/templates/{template_id}", remove_template, TemplateArgs),
    Route("POST", "/templates/{template_id}/render", render_template, RenderRequest),
    Route("GET", "/renders/{render_id}", get_render, RenderArgs),
]
