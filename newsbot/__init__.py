"""AI lab blog watcher.

Polls a fixed list of AI lab blogs, summarizes new articles with an LLM,
enriches them with web research and optional cartoons, and posts the
result as a Slack thread.

Example:
    $ newsbot run
    $ newsbot post https://www.anthropic.com/engineering/some-post
"""

__version__ = "0.1.0"
