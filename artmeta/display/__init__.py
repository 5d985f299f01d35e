"""Terminal presentation for artmeta — Rich progress bars and report panels.

Modules
-------
progress
    ``RichProgressReporter`` implements the engine's progress callback
    with two Rich progress bars.
renderer
    ``ReportRenderer`` turns ``VerificationReport`` and ``Metadata`` into
    Rich renderables.
"""
