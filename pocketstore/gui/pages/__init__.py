"""
pages — the two screens hosted by MainWindow.

SecureValuePage  — encrypted single-value storage
PeoplePage       — paginated people table (+ EditPersonDialog)
"""
