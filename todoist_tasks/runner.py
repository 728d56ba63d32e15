"""
Flow Runner - run task definitions one after another

Each task gets its own RunContext view (named logger, shared variables and
storage). A finished task's output is available to later tasks as
{{ outputs.<task_id>.<field> }}. The first failing task stops the run.
"""

import logging
from typing import Any, Dict

from .context import RunContext
from .loader import FlowConfig, build_task

logger = logging.getLogger(__name__)


class FlowRunner:
    """
    Sequential runner for a loaded flow.

    Example:
        flow = FlowLoader().load_from_file("daily-review.yaml")
        runner = FlowRunner(RunContext(secrets={"TODOIST_API_TOKEN": "..."}))
        outputs = await runner.run(flow)
        outputs["today"]["count"]
    """

    def __init__(self, context: RunContext):
        self.context = context

    async def run(self, flow: FlowConfig) -> Dict[str, Dict[str, Any]]:
        """
        Run every task of the flow in order.

        Returns:
            Outputs keyed by task id (camelCase dicts)
        """
        self.context.variables.setdefault("flow", {"id": flow.id})
        # Variables passed in by the caller win over the flow defaults
        flow_vars = dict(flow.vars)
        flow_vars.update(self.context.variables.get("vars") or {})
        self.context.variables["vars"] = flow_vars

        outputs: Dict[str, Dict[str, Any]] = {}
        for definition in flow.tasks:
            task = build_task(definition)
            task_context = self.context.for_task(definition.id)

            logger.info(f"Running task '{definition.id}' ({definition.type})")
            try:
                result = await task.run(task_context)
            except Exception as e:
                logger.error(f"Task '{definition.id}' failed: {e}")
                raise

            output = result.to_dict()
            outputs[definition.id] = output
            self.context.add_output(definition.id, output)

        logger.info(f"Flow '{flow.id}' completed: {len(outputs)} tasks")
        return outputs
