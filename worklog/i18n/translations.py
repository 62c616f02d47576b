# -*- coding: utf-8 -*-
"""
Translation dictionaries for German and English.

This module contains all translatable strings for the Worklog UI. Labels that
are part of stored data or summary keys ("No Project", "Deleted Task", ...)
are not translated.
"""

TRANSLATIONS = {
    "en": {
        # Application
        "app.name": "Worklog",
        "error": "Error",
        "init_error.title": "Initialization Error",
        "init_error.message": "Failed to initialize application:\n{error}",

        # Main window
        "main.title": "Worklog",
        "main.tasks": "Tasks",
        "main.projects": "Projects",
        "main.summary": "Summary",
        "main.new_project": "+ Project",
        "main.new_task": "+ Task",
        "main.header_task": "Task",
        "main.header_project": "Project",
        "main.header_actions": "Actions",
        "main.summary_by_project": "By Project",
        "main.summary_by_task": "By Task",
        "main.summary_by_project_task": "By Task in Project",
        "main.no_data": "No data available",
        "main.export_summary": "Export summary",

        # Actions
        "action.start": "Start",
        "action.pause": "Pause",
        "action.resume": "Resume",
        "action.stop": "Stop",
        "action.delete": "Delete",
        "action.save": "Save",
        "action.cancel": "Cancel",

        # Dialogs
        "project_dialog.title": "New Project",
        "project_dialog.name": "Project name:",
        "task_dialog.title": "New Task",
        "task_dialog.name": "Task name:",
        "task_dialog.project": "Project:",

        # Export
        "export.title": "Export Summary",
        "export.filter": "Text files (*.txt)",
        "export.saved_to": "Summary saved to:\n{path}",
        "export.failed": "Could not write the summary:\n{error}",

        # Confirmations
        "confirm.title": "Please confirm",
        "confirm.delete_project": "Delete this project? Associated tasks will move to \"No Project\".",
        "confirm.delete_task": "Delete this task?",
    },
    "de": {
        # Application
        "app.name": "Worklog",
        "error": "Fehler",
        "init_error.title": "Initialisierungsfehler",
        "init_error.message": "Anwendung konnte nicht gestartet werden:\n{error}",

        # Main window
        "main.title": "Worklog",
        "main.tasks": "Aufgaben",
        "main.projects": "Projekte",
        "main.summary": "Übersicht",
        "main.new_project": "+ Projekt",
        "main.new_task": "+ Aufgabe",
        "main.header_task": "Aufgabe",
        "main.header_project": "Projekt",
        "main.header_actions": "Aktionen",
        "main.summary_by_project": "Nach Projekt",
        "main.summary_by_task": "Nach Aufgabe",
        "main.summary_by_project_task": "Nach Aufgabe im Projekt",
        "main.no_data": "Keine Daten vorhanden",
        "main.export_summary": "Übersicht exportieren",

        # Actions
        "action.start": "Start",
        "action.pause": "Pause",
        "action.resume": "Fortsetzen",
        "action.stop": "Stopp",
        "action.delete": "Löschen",
        "action.save": "Speichern",
        "action.cancel": "Abbrechen",

        # Dialogs
        "project_dialog.title": "Neues Projekt",
        "project_dialog.name": "Projektname:",
        "task_dialog.title": "Neue Aufgabe",
        "task_dialog.name": "Aufgabenname:",
        "task_dialog.project": "Projekt:",

        # Export
        "export.title": "Übersicht exportieren",
        "export.filter": "Textdateien (*.txt)",
        "export.saved_to": "Übersicht gespeichert unter:\n{path}",
        "export.failed": "Übersicht konnte nicht geschrieben werden:\n{error}",

        # Confirmations
        "confirm.title": "Bitte bestätigen",
        "confirm.delete_project": "Projekt löschen? Zugehörige Aufgaben werden nach \"No Project\" verschoben.",
        "confirm.delete_task": "Aufgabe löschen?",
    },
}
