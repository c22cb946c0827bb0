from flask import request, render_template, redirect, url_for, flash
from physiohub.services import admin_service


def list_accounts(principal):
    return render_template('admin_dashboard.html', accounts=admin_service.list_accounts())


def edit_account(principal, account_id):
    """Shows the edit form, or applies the submitted fields."""
    if request.method == 'GET':
        account = admin_service.get_account(account_id)
        return render_template('admin_edit.html', account=account)

    fields = {
        field: request.form[field]
        for field in admin_service.EDITABLE_FIELDS
        if field in request.form
    }
    if admin_service.edit_account(account_id, fields):
        flash('User updated.', 'success')
    else:
        flash('No changes.', 'info')
    return redirect(url_for('views.admin_dashboard'))


def deactivate_account(principal, account_id):
    admin_service.deactivate(account_id, principal.account_id)
    flash('User deactivated.', 'success')
    return redirect(url_for('views.admin_dashboard'))
