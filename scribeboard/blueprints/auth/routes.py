from flask import current_app, render_template, redirect, url_for, flash
from flask_login import login_user, logout_user, login_required
from . import bp
from .forms import LoginForm
from ...models.user import User


@bp.route("/login", methods=["GET", "POST"])
def login():
    form = LoginForm()
    if form.validate_on_submit():
        email = form.email.data.strip().lower()
        user = User.query.filter_by(email=email).first()
        if user and user.check_password(form.password.data):
            login_user(user)
            current_app.logger.info('User %s logged in', user.id)
            return redirect(url_for("dashboard.index"))
        flash("Invalid credentials", "danger")
    return render_template("auth/login.html", form=form)


@bp.route("/logout", methods=["POST"])
@login_required
def logout():
    logout_user()
    return redirect(url_for("auth.login"))
