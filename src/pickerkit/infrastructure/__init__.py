"""Infrastructure layer — locale data, host document contract, scheduling.

Everything here touches process-wide resources (Babel locale data, the
document body, the animation-frame clock) behind small explicit objects
that can be injected and reset.
"""
