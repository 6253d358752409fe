"""Starter .commitguard.toml template."""

DEFAULT_TOML = """\
# commitguard configuration
version = "1.0"

[checks]
# requireMatchingAuthorName = false
# requireMatchingAuthorEmail = false
# committerEmailRegex = ".*@example\\\\.com"   # only used when requireMatchingAuthorEmail is off
# requireJiraIssue = false
# ignoreUnknownIssueProjectKeys = false
# commitMessageRegex = "[A-Z][A-Z0-9_]*-[0-9]+: .*"
# branchNameRegex = "(feature|bugfix)/.*"       # new branches only
# excludeByRegex = "#skipcheck"                 # partial match on the message
# excludeBranchRegex = "release/.*"             # must match the whole branch name
# excludeMergeCommits = false
# excludeServiceUserCommits = false
# excludeUsers = "build-bot, release-bot"

[jira]
# url = "https://jira.example.com"
# username = "commitguard"
# token_env = "COMMITGUARD_JIRA_TOKEN"
# timeout = 10.0
# issue_jql = "status != Closed"

[user]
# Fallbacks when COMMITGUARD_USER* environment variables are not set.
# name = "jsmith"
# display_name = "John Smith"
# email = "jsmith@example.com"
# type = "normal"         # normal | service

[output]
format = "terminal"       # terminal | json
show_summary = true
# header = "Push rejected."
# footer = "See https://wiki.example.com/commit-policy"
"""
