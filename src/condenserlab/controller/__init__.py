"""
The CONTROLLER layer advances and mutates the model.
Physics, the resistance calculator and the session are Qt-free; only the
background workers depend on PySide6.
"""
