from typing import Any, Dict, List, Optional
from .formatting import print_json_data, print_table
from .models import LifecycleEvent
from .phases import audit, locate


TASK_COLUMNS = ["Task", "Group", "Status", "Kind", "Drain action"]

def build_node_report(event: LifecycleEvent) -> Dict[str, Any]:
    """
    Read-only snapshot of the node named by `event` and what a drain pass would
    do with each of its tasks. Makes no changes.
    """
    node = locate.execute(event.cluster_name, event.instance_id)
    tasks = audit.query_tasks(event.cluster_name, node)

    rows: List[Dict[str, str]] = []
    for t in tasks:
        rows.append({
            "Task": t.arn.rsplit("/", 1)[-1],
            "Group": t.group or "-",
            "Status": t.last_status or "-",
            "Kind": "managed" if t.is_managed else "standalone",
            "Drain action": "wait for reschedule" if t.is_managed else "stop",
        })
    managed = sum(1 for t in tasks if t.is_managed)
    return {
        "cluster": event.cluster_name,
        "instance_id": event.instance_id,
        "container_instance_arn": node.arn,
        "status": node.status,
        "transition": event.transition,
        "managed_tasks": managed,
        "standalone_tasks": len(tasks) - managed,
        "tasks": rows,
    }

def print_node_report(event: LifecycleEvent, output_json: Optional[str] = None) -> None:
    report = build_node_report(event)
    if output_json is not None:
        print_json_data(report, output_json)
        return

    print(f"Cluster:            {report['cluster']}")
    print(f"Instance:           {report['instance_id']} ({report['container_instance_arn']})")
    print(f"Status:             {report['status']}")
    print(f"Lifecycle:          {report['transition']}")
    print(f"Managed/standalone: {report['managed_tasks']}/{report['standalone_tasks']}")
    if not report["tasks"]:
        print("No tasks placed on this container instance.")
        return
    print_table(
        f"Tasks on {report['instance_id']}",
        TASK_COLUMNS,
        report["tasks"],
        styles={"Kind": "cyan", "Drain action": "yellow"},
    )
