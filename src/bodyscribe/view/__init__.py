"""
The VIEW layer renders generated meshes with PyVista.
Import it only when a preview is requested; the core does not depend on it.
"""
