import pytest
from psycopg2 import errors as pg_errors

from db.connection import savepoint
from errors import ConflictError, NotFoundError
from models.engagement import Comment, Like

pytestmark = pytest.mark.db


# ── likes ─────────────────────────────────────────────────

def test_add_like(engagement, db):
    p0 = db.post_ids[0]
    like = engagement.add_like("testuser2", p0)
    assert like == Like(user_id=1001, post_id=p0)


def test_like_state_round_trips(engagement, db):
    p0 = db.post_ids[0]
    engagement.add_like("testuser2", p0)

    with pytest.raises(ConflictError, match="already liked"):
        engagement.add_like("testuser2", p0)

    engagement.remove_like("testuser2", p0)
    assert engagement.add_like("testuser2", p0) == Like(user_id=1001, post_id=p0)


def test_add_like_checks_user_before_post(engagement):
    with pytest.raises(NotFoundError, match="user"):
        engagement.add_like("nope", 0)


def test_add_like_unknown_post(engagement):
    with pytest.raises(NotFoundError, match="post"):
        engagement.add_like("testuser1", 0)


def test_remove_like_not_liked_is_silent(engagement, db, scalar):
    engagement.remove_like("testuser3", db.post_ids[0])
    assert scalar("SELECT COUNT(*) FROM likes;") == 3


def test_remove_like_unknown_user(engagement, db):
    with pytest.raises(NotFoundError):
        engagement.remove_like("nope", db.post_ids[0])


def test_get_user_likes(engagement, db):
    p0, p1, _ = db.post_ids
    liked = engagement.get_user_likes("testuser1")
    assert sorted(l.post_id for l in liked) == [p0, p1]
    assert all(l.image_file == "img.jpg" for l in liked)


def test_get_user_likes_unknown_user(engagement):
    with pytest.raises(NotFoundError):
        engagement.get_user_likes("nope")


def test_schema_rejects_duplicate_like(db):
    with pytest.raises(pg_errors.UniqueViolation):
        with savepoint(db.conn), db.conn.cursor() as cur:
            cur.execute(
                "INSERT INTO likes (user_id, post_id) VALUES (1000, %s);",
                (db.post_ids[0],),
            )


# ── comments ──────────────────────────────────────────────

def test_add_comment(engagement, db):
    p1 = db.post_ids[1]
    comment = engagement.add_comment("testuser3", p1, "nice")

    assert isinstance(comment, Comment)
    assert comment.comment == "nice"
    assert comment.user_id == 1002
    assert comment.post_id == p1
    assert comment.date_posted is not None


def test_add_comment_unknown_user(engagement, db):
    with pytest.raises(NotFoundError):
        engagement.add_comment("nope", db.post_ids[0], "hi")


def test_add_comment_unknown_post_leaves_no_orphan(engagement, scalar):
    with pytest.raises(NotFoundError):
        engagement.add_comment("testuser1", 0, "hi")
    assert scalar("SELECT COUNT(*) FROM comments WHERE post_id = 0;") == 0


def test_remove_comment(engagement, db, scalar):
    engagement.remove_comment(db.post_ids[0], 500)
    assert scalar("SELECT COUNT(*) FROM comments WHERE id = 500;") == 0


def test_remove_comment_requires_matching_post(engagement, db, scalar):
    engagement.remove_comment(db.post_ids[1], 500)
    assert scalar("SELECT COUNT(*) FROM comments WHERE id = 500;") == 1


def test_remove_comment_missing_is_silent(engagement, db):
    engagement.remove_comment(db.post_ids[0], 0)
