"""Three users: A posts, B likes, C comments."""
import pytest

from repositories import EngagementRepository, PostRepository, UserRepository

pytestmark = pytest.mark.db


def test_like_and_comment_show_up_on_post(db):
    users = UserRepository(db.conn)
    posts = PostRepository(db.conn)
    engagement = EngagementRepository(db.conn)

    for name in ("alice", "bob", "carol"):
        users.register(
            username=name,
            password=f"{name}-pw",
            first_name=name.title(),
            last_name="Example",
            email=f"{name}@example.com",
        )

    post = posts.create("sunset.jpg", "golden hour", "alice")
    engagement.add_like("bob", post.id)
    engagement.add_comment("carol", post.id, "nice")

    detail = posts.get(post.id)
    assert detail.user.username == "alice"
    assert [l.user_id for l in detail.likes] == [users.get_id("bob")]
    assert [(c.comment, c.username) for c in detail.comments] == [("nice", "carol")]
