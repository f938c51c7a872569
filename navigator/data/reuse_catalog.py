# Built-in steps of the Data Reuse Navigator.
# Each definition is either a checklist (optionally multi-select) or a planner with text fields.

reuse_step_definitions = [
    {
        "name": "Reuse Eligibility",
        "checklist": [
            {"label": "Age of Data", "desc": "Was the data collected within the last 5 years?"},
            {"label": "Consent Scope", "desc": "The original consent included permission for future analysis or sharing?"},
            {"label": "Data Ownership & Access", "desc": "Do you have legal access and permission to use the data?"},
            {"label": "Data Integrity", "desc": "Is the dataset complete and well-documented?"},
            {"label": "Ethical Fitness", "desc": "Does the dataset avoid major ethical concerns?"},
        ],
    },
    {
        "name": "Strategic Fit",
        "checklist": [
            {"label": "Relevant Topic", "desc": "Does the dataset relate to a current or emerging research area?"},
            {"label": "Research Value", "desc": "Can this data help answer a new or complementary research question?"},
            {"label": "Richness", "desc": "Is the dataset rich enough (sample size, variable diversity) for meaningful analysis?"},
            {"label": "Knowledge Gap", "desc": "Could the data contribute to filling a knowledge gap or inform policy/practice?"},
            {"label": "Stakeholder Benefit", "desc": "Would other stakeholders benefit from findings from this data?"},
        ],
    },
    {
        "name": "Readiness",
        "checklist": [
            {"label": "Documentation", "desc": "Is there a complete codebook or variable guide?"},
            {"label": "De-identification", "desc": "Are all identifiers removed? No re-identification risk?"},
            {"label": "Data Quality", "desc": "Has the dataset been checked for missing values, outliers, or errors?"},
            {"label": "Ethics Approval", "desc": "Is secondary use approved in the original or new ethics application?"},
            {"label": "FAIR/CARE", "desc": "Does the dataset align with FAIR & CARE principles?"},
        ],
    },
    {
        "name": "Reuse Pathway",
        "checklist": [
            {"label": "Secondary Analysis", "desc": "Reanalyze data for new questions or extensions"},
            {"label": "Data Publication / Open Data", "desc": "Publish in a repository or as open data"},
            {"label": "Knowledge Translation", "desc": "Policy briefs, infographics, blogs, etc."},
            {"label": "Teaching/Training", "desc": "Use as a teaching or workshop dataset"},
            {"label": "Meta-analysis Contribution", "desc": "Pooled analysis or systematic review"},
            {"label": "Internal Learning", "desc": "Team evaluation, QI, or planning"},
        ],
        "multi": True,
    },
    {
        "name": "Action Planner",
        "fields": [
            {"label": "Selected Reuse Option(s)", "type": "text"},
            {"label": "Specific Output(s) (e.g., policy brief, slide deck)", "type": "text"},
            {"label": "Responsible Person(s)", "type": "text"},
            {"label": "Required Resources (e.g., repository, ethics clearance)", "type": "text"},
            {"label": "Timeline (draft, review, publish)", "type": "text"},
            {"label": "Risks / Barriers", "type": "text"},
            {"label": "Success Indicators (product, citation, uptake, etc.)", "type": "text"},
            {"label": "Tracking Method (spreadsheet, meeting notes, etc.)", "type": "text"},
        ],
    },
]
