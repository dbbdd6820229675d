"""Small, consistent sample datasets for trying the app without uploads.

Every requested task exists and every required skill is held by at least
one worker, so the samples validate cleanly.
"""

from dataalchemist.models import ENTITY_MODELS, Entity, EntityType

SAMPLE_ROWS: dict[EntityType, list[dict]] = {
    EntityType.CLIENTS: [
        {
            "ClientID": "C001",
            "ClientName": "TechCorp Solutions",
            "PriorityLevel": 5,
            "RequestedTaskIDs": "T001,T003,T007",
            "GroupTag": "enterprise",
            "AttributesJSON": '{"budget": 50000, "deadline": "2024-03-15"}',
        },
        {
            "ClientID": "C002",
            "ClientName": "StartupInc",
            "PriorityLevel": 3,
            "RequestedTaskIDs": "T002,T005",
            "GroupTag": "startup",
            "AttributesJSON": '{"budget": 15000, "deadline": "2024-02-28"}',
        },
        {
            "ClientID": "C003",
            "ClientName": "Global Enterprises",
            "PriorityLevel": 4,
            "RequestedTaskIDs": "T001,T004,T006,T008",
            "GroupTag": "enterprise",
            "AttributesJSON": '{"budget": 75000, "deadline": "2024-04-01"}',
        },
        {
            "ClientID": "C004",
            "ClientName": "Local Business Co",
            "PriorityLevel": 2,
            "RequestedTaskIDs": "T009,T010",
            "GroupTag": "small-business",
            "AttributesJSON": '{"budget": 8000}',
        },
        {
            "ClientID": "C005",
            "ClientName": "Innovation Labs",
            "PriorityLevel": 5,
            "RequestedTaskIDs": "T002,T003,T007",
            "GroupTag": "research",
            "AttributesJSON": '{"budget": 100000, "deadline": "2024-05-15"}',
        },
        {
            "ClientID": "C006",
            "ClientName": "Healthcare Plus",
            "PriorityLevel": 4,
            "RequestedTaskIDs": "T002,T005,T008",
            "GroupTag": "healthcare",
            "AttributesJSON": '{"budget": 60000, "compliance": "HIPAA"}',
        },
        {
            "ClientID": "C007",
            "ClientName": "FinTech Solutions",
            "PriorityLevel": 5,
            "RequestedTaskIDs": "T006,T009,T010",
            "GroupTag": "finance",
            "AttributesJSON": '{"budget": 120000, "deadline": "2024-04-10"}',
        },
        {
            "ClientID": "C008",
            "ClientName": "RetailMax",
            "PriorityLevel": 2,
            "RequestedTaskIDs": "T001,T007",
            "GroupTag": "retail",
            "AttributesJSON": "{}",
        },
    ],
    EntityType.WORKERS: [
        {
            "WorkerID": "W001",
            "WorkerName": "Alice Johnson",
            "Skills": "javascript,react,typescript",
            "AvailableSlots": "[1,2,3,5]",
            "MaxLoadPerPhase": 3,
            "WorkerGroup": "frontend",
            "QualificationLevel": "senior",
        },
        {
            "WorkerID": "W002",
            "WorkerName": "Bob Smith",
            "Skills": "python,django,postgresql,aws",
            "AvailableSlots": "[2,3,4,5,6]",
            "MaxLoadPerPhase": 4,
            "WorkerGroup": "backend",
            "QualificationLevel": "senior",
        },
        {
            "WorkerID": "W003",
            "WorkerName": "Carol Davis",
            "Skills": "ui/ux,figma,prototyping",
            "AvailableSlots": "[1,3,4]",
            "MaxLoadPerPhase": 2,
            "WorkerGroup": "design",
            "QualificationLevel": "mid-level",
        },
        {
            "WorkerID": "W004",
            "WorkerName": "David Wilson",
            "Skills": "java,spring,docker",
            "AvailableSlots": "[1,2,4,5,6]",
            "MaxLoadPerPhase": 3,
            "WorkerGroup": "backend",
            "QualificationLevel": "senior",
        },
        {
            "WorkerID": "W005",
            "WorkerName": "Emma Brown",
            "Skills": "react,css,html",
            "AvailableSlots": "[2,3,5,6]",
            "MaxLoadPerPhase": 3,
            "WorkerGroup": "frontend",
            "QualificationLevel": "mid-level",
        },
        {
            "WorkerID": "W006",
            "WorkerName": "Frank Miller",
            "Skills": "devops,docker,kubernetes,aws",
            "AvailableSlots": "[1,2,3,4,5,6]",
            "MaxLoadPerPhase": 2,
            "WorkerGroup": "devops",
            "QualificationLevel": "senior",
        },
        {
            "WorkerID": "W007",
            "WorkerName": "Grace Lee",
            "Skills": "qa,testing,selenium",
            "AvailableSlots": "[1,2,3]",
            "MaxLoadPerPhase": 2,
            "WorkerGroup": "qa",
            "QualificationLevel": "mid-level",
        },
        {
            "WorkerID": "W008",
            "WorkerName": "Henry Clark",
            "Skills": "python,sql,data-analysis",
            "AvailableSlots": "[3,4,5]",
            "MaxLoadPerPhase": 2,
            "WorkerGroup": "data-science",
            "QualificationLevel": "junior",
        },
    ],
    EntityType.TASKS: [
        {
            "TaskID": "T001",
            "TaskName": "Landing Page Redesign",
            "Category": "development",
            "Duration": 2,
            "RequiredSkills": "react,css",
            "PreferredPhases": "[1,2,3]",
            "MaxConcurrent": 2,
        },
        {
            "TaskID": "T002",
            "TaskName": "REST API Build",
            "Category": "development",
            "Duration": 3,
            "RequiredSkills": "python,postgresql",
            "PreferredPhases": "[2,3,4]",
            "MaxConcurrent": 2,
        },
        {
            "TaskID": "T003",
            "TaskName": "Design System",
            "Category": "design",
            "Duration": 2,
            "RequiredSkills": "figma,ui/ux",
            "PreferredPhases": "[1,3]",
            "MaxConcurrent": 1,
        },
        {
            "TaskID": "T004",
            "TaskName": "CI/CD Pipeline",
            "Category": "integration",
            "Duration": 1,
            "RequiredSkills": "docker,kubernetes",
            "PreferredPhases": "[2]",
            "MaxConcurrent": 1,
        },
        {
            "TaskID": "T005",
            "TaskName": "Regression Suite",
            "Category": "testing",
            "Duration": 2,
            "RequiredSkills": "testing,selenium",
            "PreferredPhases": "[2,3]",
            "MaxConcurrent": 1,
        },
        {
            "TaskID": "T006",
            "TaskName": "Sales Dashboard",
            "Category": "analytics",
            "Duration": 2,
            "RequiredSkills": "python,sql",
            "PreferredPhases": "[4,5]",
            "MaxConcurrent": 1,
        },
        {
            "TaskID": "T007",
            "TaskName": "Mobile Checkout",
            "Category": "development",
            "Duration": 3,
            "RequiredSkills": "react,typescript",
            "PreferredPhases": "[3,4,5]",
            "MaxConcurrent": 2,
        },
        {
            "TaskID": "T008",
            "TaskName": "Security Audit",
            "Category": "security",
            "Duration": 1,
            "RequiredSkills": "aws,devops",
            "PreferredPhases": "[5]",
            "MaxConcurrent": 1,
        },
        {
            "TaskID": "T009",
            "TaskName": "Payment Integration",
            "Category": "integration",
            "Duration": 2,
            "RequiredSkills": "java,spring",
            "PreferredPhases": "[4,5,6]",
            "MaxConcurrent": 1,
        },
        {
            "TaskID": "T010",
            "TaskName": "Data Migration",
            "Category": "analytics",
            "Duration": 1,
            "RequiredSkills": "sql,postgresql",
            "PreferredPhases": "[6]",
            "MaxConcurrent": 1,
        },
    ],
}


def get_sample(entity_type: EntityType) -> list[Entity]:
    """Fresh model instances of the sample rows for one entity type."""
    model = ENTITY_MODELS[entity_type]
    return [model.model_validate(row) for row in SAMPLE_ROWS[entity_type]]
