"""
The VIEW layer renders whatever the controller produces and forwards user
input to it. It contains no physics.
"""
