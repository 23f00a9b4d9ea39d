"""
Worker module.
Contains lifecycle hook dispatch and the synchronous execution engine.
"""
