"""Application composition layer for the Tkinter GUI.

Controllers and presenters in this package wire views, view models, adapters,
and use cases into the runnable command library without placing business
logic in views.
"""
