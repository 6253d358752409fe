"""commitguard — enforce commit-acceptance policy on pushed refs."""

__version__ = "0.1.0"
