# foxus

A local-first productivity tracker with a focus mode. Foxus records the
applications and web pages you spend time on and sorts them into categories
that are productive (1), neutral (0) or distracting (-1). Everything is
kept in a SQLite database on your own machine.

## Installing

```
pip install .
```

## The browser native-messaging host

A browser extension talks to Foxus through the native-messaging host:

```
foxus-native-host
foxus-native-host --db path/to/foxus.db
```

Without `--db` the database is `foxus.db` in the user data directory for
Foxus, which is created if needed. The schema, the default categories and
the default rules are set up on first use. Other arguments the browser
passes are ignored.

The host reads messages from standard input, each a 4-byte little-endian
length followed by that many bytes of JSON (at most 1 MiB), and writes its
replies in the same form on standard output. It understands three messages:

- `{"type": "activity", "url": ..., "title": ..., "timestamp": ...}` records
  five seconds of browsing, categorised by the URL's domain. The URL is cut
  to 2048 bytes and the title to 512 bytes; the activity is stamped with the
  host's current time. No reply is sent.
- `{"type": "request_state"}` answers with
  `{"type": "state", "focusActive": ..., "budgetRemaining": ..., "blockedDomains": [...]}`.
- `{"type": "use_distraction_time"}` spends 30 seconds of the active
  session's budget and answers `{"type": "budget_updated", "remaining": ...}`
  or, once nothing is left, `{"type": "hard_blocked"}`. Without an active
  session there is no reply.

The host stops with exit status 0 when its input closes. A message that is
too large or malformed makes it print `Native host error: ...` to standard
error and exit with status 1.

## Default categories and rules

The categories are Coding, Communication, Entertainment, Reference and
Uncategorized. Default rules match app names such as "code", "terminal" or
"slack" and domains such as "github.com", "stackoverflow.com" or
"youtube.com". Matching is case-insensitive; a pattern is a substring, and
`*` in a pattern lets the pieces between wildcards appear in order anywhere.
Rules with a higher priority are tried first; anything unmatched is
Uncategorized. While focus mode is on, the domain patterns of distracting
categories are the blocked domains.

## Using it as a library

```python
from foxus.db import Database, run_migrations
from foxus.categorizer import Categorizer
from foxus.focus import FocusManager
from foxus.commands import get_today_stats, start_focus_session

db = Database("foxus.db")
run_migrations(db.connection)

categorizer = Categorizer(db.connection)
categorizer.categorize_url("youtube.com")      # id of "Entertainment"

focus = FocusManager(db)
start_focus_session(focus, 25)                 # 25 minutes of distraction budget
focus.is_domain_blocked("www.reddit.com")      # True while focus mode is on

stats = get_today_stats(db)                    # activity since midnight UTC
print(stats.productive_secs, [app.name for app in stats.top_apps])
```

The functions in `foxus.commands` raise `foxus.commands.CommandError` with
a message fit to show to a user; `start_focus_session` accepts budgets from
1 to 1440 minutes. The models (`Category`, `Rule`, `Activity`,
`FocusSession`) live in modules of the same names in lower case.

`foxus.tracker.TrackerService` polls a `foxus.platform.PlatformTracker` on
a background thread, every `poll_interval_secs` (5 by default), and stores
an activity for each poll unless the user has been idle for
`idle_threshold_secs` (120 by default). `poll_once()` does a single poll.

## What it does not do

Foxus has no window of its own, no tray icon and no graphical interface;
the functions in `foxus.commands` are plain calls for one to be built on.
It also cannot see which window is in front on any operating system: the
only tracker it ships, `foxus.platform.StubTracker`, always reports an app
called "TestApp" and no idle time. To record real desktop activity, pass
`TrackerService` your own `PlatformTracker` subclass.

## Running the tests

```
pip install .[test]
pytest
```