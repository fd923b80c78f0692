"""
Schedule expansion.

calendar_math holds the date arithmetic, occurrences expands a single
schedule, and upcoming merges all schedules into one feed.
"""
