"""
Transition rule module.

Market participant state, Moore-neighbourhood resolution and the rule that
derives each cell's next action from its neighbours and its open position.
"""
