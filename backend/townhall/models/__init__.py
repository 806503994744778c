"""
ORM models. Importing this package registers every table on Base.metadata.

Relationships are plain foreign-key columns; related rows are fetched with
queries in the repositories rather than through relationship() attributes.
"""

from townhall.models.user import User
from townhall.models.hashtag import Hashtag
from townhall.models.discussion import Discussion, discussion_hashtags
from townhall.models.comment import Comment
from townhall.models.like import Like

__all__ = ["User", "Hashtag", "Discussion", "discussion_hashtags", "Comment", "Like"]
