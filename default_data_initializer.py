SAMPLE_ROWS = [
    {
        "jobRequest": "Launch social media campaign for product release",
        "submitted": "15-11-2024",
        "status": "in-progress",
        "submitter": "Aisha Patel",
        "url": "www.aishapatel.com",
        "assigned": "Sophie Choudhury",
        "priority": "Medium",
        "dueDate": "20-11-2024",
        "estValue": "6,200,000",
    },
    {
        "jobRequest": "Update press kit for company redesign",
        "submitted": "28-10-2024",
        "status": "need-to-start",
        "submitter": "Irfan Khan",
        "url": "www.irfankhan.com",
        "assigned": "Tejas Pandey",
        "priority": "High",
        "dueDate": "30-10-2024",
        "estValue": "3,500,000",
    },
    {
        "jobRequest": "Finalize user testing feedback for app update",
        "submitted": "05-12-2024",
        "status": "in-progress",
        "submitter": "Mark Johnson",
        "url": "www.markjohnson.com",
        "assigned": "Rachel Lee",
        "priority": "Medium",
        "dueDate": "10-12-2024",
        "estValue": "4,750,000",
    },
    {
        "jobRequest": "Design new features for the website",
        "submitted": "10-01-2025",
        "status": "complete",
        "submitter": "Emily Green",
        "url": "www.emilygreen.com",
        "assigned": "Tom Wright",
        "priority": "Low",
        "dueDate": "15-01-2025",
        "estValue": "5,900,000",
    },
    {
        "jobRequest": "Prepare financial report for Q4",
        "submitted": "25-01-2025",
        "status": "blocked",
        "submitter": "Jessica Brown",
        "url": "www.jessicabrown.com",
        "assigned": "Kevin Smith",
        "priority": "Low",
        "dueDate": "30-01-2025",
        "estValue": "2,800,000",
    },
]


class DefaultDataInitializer:
    def populate(self, store):
        for values in SAMPLE_ROWS:
            row_id = store.insert_row()
            for key, value in values.items():
                store.set_field(row_id, key, value)
        return store
