from domain.user import Identity


def can_create_post(identity: Identity) -> bool:
    return identity.is_teacher


def can_modify_post(identity: Identity, post: dict) -> bool:
    # admins, or the teacher who posted it
    return identity.is_admin or identity.username == post.get("postedBy")


def can_delete_comment(identity: Identity, post: dict, comment: dict) -> bool:
    """
    A comment may be removed by an admin, by its author, or by the owner
    of the post it sits on.
    """
    return (
        identity.is_admin
        or identity.username == comment.get("author")
        or identity.username == post.get("postedBy")
    )
