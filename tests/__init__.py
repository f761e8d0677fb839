"""
Cross-app test suite for the Smart Agriculture Management platform.

Test Organization:
- integration/ - tests that exercise several domain apps together
- App-specific tests remain in their respective app directories (e.g., accounts/tests.py)
"""
