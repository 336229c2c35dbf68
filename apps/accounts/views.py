import logging

from django.shortcuts import render, redirect
from django.contrib.auth import authenticate, login, logout
from django.contrib import messages
from django.utils.http import url_has_allowed_host_and_scheme
from django.utils.translation import gettext_lazy as _
from django.views.decorators.cache import never_cache
from django.views.decorators.http import require_http_methods

from .forms import LoginForm, SignupForm

logger = logging.getLogger(__name__)


# AUTHENTICATION VIEWS
@never_cache
def login_view(request):
    # Logged-in users are sent to the dashboard by SessionRouteMiddleware
    if request.method == 'POST':
        form = LoginForm(request.POST)

        if form.is_valid():
            email = form.cleaned_data['email']
            password = form.cleaned_data['password']

            # Returns User object if valid, None if invalid
            user = authenticate(request, username=email, password=password)

            if user is not None:
                login(request, user)

                next_url = request.GET.get('next')
                if next_url and url_has_allowed_host_and_scheme(next_url, allowed_hosts={request.get_host()}):
                    return redirect(next_url)
                return redirect('core:dashboard')

            messages.error(request, _('Email o contraseña incorrectos'))
        else:
            messages.error(request, _('Por favor, corrige los errores'))

    else:
        form = LoginForm()

    context = {
        'form': form,
        'page_title': _('Iniciar sesión'),
    }

    return render(request, 'accounts/login.html', context)


@never_cache
def signup_view(request):
    if request.method == 'POST':
        form = SignupForm(request.POST)

        if form.is_valid():
            try:
                user = form.save()
            except Exception as e:
                logger.error(f"Error creating account: {str(e)}")
                messages.error(request, _('Error al crear la cuenta'))
            else:
                logger.info(f"New account created: {user.email}")
                messages.success(request, _('Cuenta creada correctamente. Ya puedes iniciar sesión.'))
                return redirect('accounts:login')
    else:
        form = SignupForm()

    context = {
        'form': form,
        'page_title': _('Crear cuenta'),
    }

    return render(request, 'accounts/signup.html', context)


@require_http_methods(['GET', 'POST'])
def logout_view(request):
    logout(request)
    return redirect('accounts:login')
