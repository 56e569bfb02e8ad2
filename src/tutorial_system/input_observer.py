"""
Input observer - turns raw input events into tutorial action tokens
"""

from typing import TYPE_CHECKING

from input_system import InputEvent, InputKind
from .actions import ActionToken

if TYPE_CHECKING:
    from tutorial_system.tutorial_controller import TutorialController
    from hybridLogger import ClassLogger

SKIP_KEY = "Tab"
CONFIRM_KEY = "Enter"
MENU_KEY = "Escape"
MINIMIZE_KEY = "KeyM"


class TutorialInputObserver:
    """
    Routes input events to the tutorial controller.

    Only the active step's rules are consulted, and only until the step has
    been marked completed. Tutorial control keys (skip, confirm, menu,
    minimize) are handled here before any step rule.
    """

    def __init__(self, controller: 'TutorialController', logger: 'ClassLogger'):
        self.controller = controller
        self.logger = logger

    def handle_event(self, event: InputEvent) -> bool:
        """
        Process one input event.

        Returns:
            True if the tutorial consumed the event
        """
        controller = self.controller
        if event.kind == InputKind.QUIT or not controller.is_active:
            return False

        step = controller.current_step
        if step is None:
            return False

        code = event.code

        if code == SKIP_KEY:
            controller.request_skip()
            return True

        if code == MENU_KEY:
            controller.toggle_pause()
            return True

        if code == MINIMIZE_KEY:
            controller.toggle_minimize()
            return True

        if code == CONFIRM_KEY:
            return self._handle_confirm()

        if controller.step_completed:
            return False

        rule = step.rule_for(code, controller.context)
        if rule is None:
            return False

        if rule.camera_distance is not None:
            controller.context.camera_distance = rule.camera_distance
        return controller.mark_step_completed(rule.action, rule.feedback)

    def _handle_confirm(self) -> bool:
        controller = self.controller
        step = controller.current_step
        action = step.enter_action(controller.context, controller.step_completed)
        if action is None:
            self.logger.debug(f"[ENTER] ignored on step '{step.step_id}'")
            return False

        controller.record_action(action)
        if step.enter_feedback and action is not ActionToken.CONFIRMED:
            controller.show_feedback(step.enter_feedback)
        return True
