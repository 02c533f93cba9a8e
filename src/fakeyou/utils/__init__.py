"""
Utility modules for the FakeYou client.
"""
