"""Photo feed service: posts, likes, comments, follows and profiles."""
